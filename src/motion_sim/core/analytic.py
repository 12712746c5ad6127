# MIT License (see LICENSE)
"""
Closed-form solutions for motion from rest against quadratic drag.

With constant applied force F, kinetic friction μ·m·g and drag k·v², an
object starting from rest (once static friction has broken) obeys
    m·dv/dt = F_net - k·v²,    F_net = F - μ·m·g
whose solution is
    v(t) = v_T · tanh(√(k·F_net)/m · t),          v_T = √(F_net/k)
    x(t) = (m/k) · ln(cosh(√(k·F_net)/m · t))
For k = 0 this degenerates to constant acceleration:
    v(t) = (F_net/m)·t,   x(t) = ½·(F_net/m)·t²

These are used to calibrate defaults and to check the integrator. They
assume F_net > 0; otherwise the object never leaves rest and both
functions return 0.
"""
from __future__ import annotations

import numpy as np

from ..constants import GRAVITY
from ..types import MotionConfig


def _driving_force(config: MotionConfig, g: float) -> float:
    return config.force - config.friction_coeff * config.mass * g


def terminal_velocity(config: MotionConfig, g: float = GRAVITY) -> float:
    """Terminal velocity √(F_net/k). Infinite without drag, 0 if the object never moves."""
    f_net = _driving_force(config, g)
    if f_net <= 0:
        return 0.0
    if config.drag_coeff == 0:
        return float("inf")
    return float(np.sqrt(f_net / config.drag_coeff))


def quadratic_drag_velocity(t: float, config: MotionConfig, g: float = GRAVITY) -> float:
    """Velocity after t seconds from rest (m/s)."""
    f_net = _driving_force(config, g)
    if f_net <= 0:
        return 0.0
    m, k = config.mass, config.drag_coeff
    if k == 0:
        return f_net / m * t
    return float(np.sqrt(f_net / k) * np.tanh(np.sqrt(k * f_net) / m * t))


def quadratic_drag_position(t: float, config: MotionConfig, g: float = GRAVITY) -> float:
    """Distance covered after t seconds from rest (m)."""
    f_net = _driving_force(config, g)
    if f_net <= 0:
        return 0.0
    m, k = config.mass, config.drag_coeff
    if k == 0:
        return 0.5 * f_net / m * t * t
    return float((m / k) * np.log(np.cosh(np.sqrt(k * f_net) / m * t)))
