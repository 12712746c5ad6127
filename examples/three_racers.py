# examples/three_racers.py
from motion_sim import ManualTickSource, SimulationController, SimulationStatus
from motion_sim.renderer import DebugRenderer

ticks = ManualTickSource(frame_interval_ms=1000 / 60)
controller = SimulationController(tick_source=ticks)

# Same force, different mass and drag: who wins?
controller.update_motion_config("blue", mass=8.0)
controller.update_motion_config("green", drag_coeff=0.005)

renderer = DebugRenderer()


def every_second(snap):
    if snap.tick % 60 == 0:
        renderer.render_snapshot(snap)


controller.subscribe(every_second)

controller.start()
ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED)

print("t:", round(controller.elapsed, 3))
for state in controller.states:
    print(state.id, state.position, state.status.value)
