# MIT License (see LICENSE)
"""
Configuration ranges, validation and calibrated defaults.

Every value that reaches the integrator has passed through one of the
validators below, which is why the integrator can divide by mass without
checking it. Invalid values are rejected with ConfigError, never clamped.

Defaults:
    DEFAULT_MOTION_CONFIG is calibrated to cover 300 m in ~8 s using the
    closed-form solution for motion against quadratic drag:
        x(t) = (m/k) · ln(cosh(√(k·F_net)/m · t)),   F_net = F - μ·m·g
    With m=5 kg, μ=0.1, k=0.015, F=75 N the object crosses 300 m at t ≈ 7.6 s.
"""
from __future__ import annotations
import logging
import math
import numbers
from dataclasses import fields

from .errors import ConfigError
from .types import GlobalConfig, MotionConfig, ObjectSpec

logger = logging.getLogger(__name__)


# Valid (inclusive) ranges for every configurable field.
RANGES: dict[str, tuple[float, float]] = {
    # GlobalConfig
    "track_length": (10.0, 1000.0),
    "time_scale": (0.1, 5.0),
    # MotionConfig
    "initial_velocity": (0.0, 100.0),
    "force": (0.0, 1000.0),
    "mass": (1.0, 100.0),
    "friction_coeff": (0.0, 1.0),
    "drag_coeff": (0.0, 0.2),
}

DEFAULT_MOTION_CONFIG = MotionConfig(
    force=75.0,
    mass=5.0,
    friction_coeff=0.1,
    drag_coeff=0.015,
    initial_velocity=0.0,
)

DEFAULT_GLOBAL_CONFIG = GlobalConfig(track_length=300.0, time_scale=1.0)

DEFAULT_OBJECTS: tuple[ObjectSpec, ...] = (
    ObjectSpec(id="pink", name="Pink", color="#ff69b4", config=DEFAULT_MOTION_CONFIG),
    ObjectSpec(id="blue", name="Blue", color="#00d2ff", config=DEFAULT_MOTION_CONFIG),
    ObjectSpec(id="green", name="Green", color="#32cd32", config=DEFAULT_MOTION_CONFIG),
)


def check_range(name: str, value) -> float:
    """
    Validate a single named value against RANGES.

    Args:
        name: Field name, a key of RANGES.
        value: Candidate value. Must be a real number; bools and numeric
               strings are rejected.

    Returns:
        The value as a float.

    Raises:
        ConfigError: If the value is not a finite number inside its range.
    """
    lo, hi = RANGES[name]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        logger.warning("rejected %s=%r: not a number", name, value)
        raise ConfigError(f"{name} must be a number, got {value!r}")
    v = float(value)
    if not math.isfinite(v) or not (lo <= v <= hi):
        logger.warning("rejected %s=%r: outside [%g, %g]", name, value, lo, hi)
        raise ConfigError(f"{name} must be within [{lo:g}, {hi:g}], got {value!r}")
    return v


def validate_motion_config(config: MotionConfig) -> MotionConfig:
    """Check every field of a MotionConfig. Returns the config unchanged."""
    for f in fields(MotionConfig):
        check_range(f.name, getattr(config, f.name))
    return config


def validate_global_config(config: GlobalConfig) -> GlobalConfig:
    """Check every field of a GlobalConfig. Returns the config unchanged."""
    for f in fields(GlobalConfig):
        check_range(f.name, getattr(config, f.name))
    return config
