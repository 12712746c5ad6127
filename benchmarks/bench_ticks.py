"""
Microbenchmark: time per tick vs number of objects.
Run:
  python benchmarks/bench_ticks.py
"""
import time

import numpy as np

from motion_sim import ManualTickSource, ObjectSpec, SimulationController
from motion_sim.config import DEFAULT_MOTION_CONFIG
from motion_sim.profiler import Profiler
from motion_sim.types import GlobalConfig, MotionConfig


def run(n: int, frames: int = 600):
    prof = Profiler()
    ticks = ManualTickSource(frame_interval_ms=1000 / 60)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    specs = []
    for i in range(n):
        cfg = MotionConfig(
            force=float(rng.uniform(50.0, 150.0)),
            mass=float(rng.uniform(2.0, 20.0)),
            friction_coeff=DEFAULT_MOTION_CONFIG.friction_coeff,
            drag_coeff=DEFAULT_MOTION_CONFIG.drag_coeff,
        )
        specs.append(ObjectSpec(id=f"obj{i}", config=cfg))

    controller = SimulationController(
        specs=specs,
        global_config=GlobalConfig(track_length=1000.0, time_scale=1.0),
        tick_source=ticks,
        profiler=prof,
    )
    controller.start()

    t0 = time.perf_counter()
    ticks.run_frames(frames)
    t1 = time.perf_counter()

    per_tick = (t1 - t0) / frames
    return per_tick, prof.stats.summary()


if __name__ == "__main__":
    for n in [1, 3, 10, 50, 250]:
        per_tick, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:10.1f}")
        for k in ["clock", "integrate", "trails"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
