# examples/load_preset.py
import json
import logging
import os

from motion_sim import ManualTickSource, SimulationStatus
from motion_sim.io import load_controller, snapshot_to_json

logging.basicConfig(level=logging.INFO)

path = os.path.join(os.path.dirname(__file__), "lab.json")
ticks = ManualTickSource(frame_interval_ms=1000 / 60)
controller = load_controller(path, tick_source=ticks)

controller.start()
# The coaster has no force and never reaches the end, so stop after 30 s of sim time
ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED or controller.elapsed > 30.0)
controller.pause()

print(json.dumps(snapshot_to_json(controller.snapshot()), indent=2)[:600])
