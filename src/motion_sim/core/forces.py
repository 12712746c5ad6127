# MIT License (see LICENSE)
"""
Force models for motion along the track.

This module provides the individual force terms acting on one object:
kinetic and static friction, quadratic air drag, and the net force that
combines them with the applied force.

All functions are pure and return scalars. Sign conventions:
- Positive is "down the track", towards the finish line.
- Friction and drag always oppose the direction of motion.

Key concepts:
- Kinetic friction magnitude is μ·m·g while moving.
- Static friction holds a resting body until |F| exceeds μs·m·g,
  with μs = STATIC_FRICTION_MULTIPLIER · μ.
- Drag is quadratic: F = k·v·|v|, so its sign follows v automatically.
"""
from __future__ import annotations

from ..constants import GRAVITY, REST_VELOCITY_EPS, STATIC_FRICTION_MULTIPLIER
from ..types import MotionConfig
from ..util import sign


def kinetic_friction(config: MotionConfig, g: float = GRAVITY) -> float:
    """
    Magnitude of kinetic friction, F_k = μ·m·g.

    Args:
        config: Object parameters (friction_coeff, mass).
        g: Gravitational acceleration in m/s².
    """
    return config.friction_coeff * config.mass * g


def static_friction_limit(
    config: MotionConfig,
    g: float = GRAVITY,
    multiplier: float = STATIC_FRICTION_MULTIPLIER,
) -> float:
    """
    Maximum static friction before a resting body breaks free.

    Implements F_s,max = multiplier · μ·m·g.
    """
    return kinetic_friction(config, g) * multiplier


def quadratic_drag(config: MotionConfig, velocity: float) -> float:
    """
    Quadratic air resistance, F_d = k·v·|v|.

    Returns a signed value with the same sign as velocity. The net force
    subtracts it, so drag always opposes motion.
    """
    return config.drag_coeff * velocity * abs(velocity)


def net_force(
    config: MotionConfig,
    velocity: float,
    g: float = GRAVITY,
    static_friction_multiplier: float = STATIC_FRICTION_MULTIPLIER,
) -> float:
    """
    Net force on an object before the velocity-reversal guard.

    At rest (|v| < REST_VELOCITY_EPS):
        |F| > F_s,max  →  F_net = F - sgn(F)·F_k - F_d   (static friction breaks)
        otherwise      →  F_net = 0                     (held by static friction)
    Moving:
        F_net = F - sgn(v)·F_k - F_d

    Args:
        config: Object parameters.
        velocity: Current signed velocity in m/s.
        g: Gravitational acceleration in m/s².
        static_friction_multiplier: Ratio μs/μk.

    Returns:
        Net force in Newtons.
    """
    f_k = kinetic_friction(config, g)
    f_d = quadratic_drag(config, velocity)
    force = config.force

    if abs(velocity) < REST_VELOCITY_EPS:
        if abs(force) > static_friction_limit(config, g, static_friction_multiplier):
            return force - sign(force) * f_k - f_d
        return 0.0

    return force - sign(velocity) * f_k - f_d
