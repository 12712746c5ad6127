# examples/static_friction.py
# Sweep the applied force around the static friction threshold 1.2·μ·m·g.
from motion_sim.core import motion_step, static_friction_limit
from motion_sim.types import MotionConfig

base = MotionConfig(force=0.0, mass=10.0, friction_coeff=0.3)
limit = static_friction_limit(base)
print(f"F_s,max = {limit:.3f} N")

for force in (limit - 1.0, limit, limit + 0.5, limit + 5.0):
    cfg = MotionConfig(force=force, mass=base.mass, friction_coeff=base.friction_coeff)
    x, v = 0.0, 0.0
    for _ in range(120):
        step = motion_step(x, v, cfg, dt=1 / 60, track_length=100.0)
        x, v = step.position, step.velocity
    print(f"F={force:7.3f} N  x(2s)={x:7.3f} m  v={v:6.3f} m/s")
