# MIT License (see LICENSE)
"""
Physical and visual constants used throughout the simulation.

All physical values use SI units. Trail constants are per-tick quantities
consumed only by visualization and never by the integrator.
"""
from __future__ import annotations

# Standard Earth gravity, g
# Value: 9.81 m/s²
GRAVITY: float = 9.81

# Ratio of the maximum static friction force to the kinetic friction force.
# Static friction is typically ~20% higher than kinetic: μs ≈ 1.2·μk.
STATIC_FRICTION_MULTIPLIER: float = 1.2

# Speed below which a body counts as being at rest (m/s).
# At rest, static friction decides whether motion starts at all.
REST_VELOCITY_EPS: float = 1e-3

# Nominal host frame rate and the matching fixed timestep.
FRAME_RATE: int = 60
DT: float = 1 / FRAME_RATE

# Trail history: maximum retained points and opacity lost per tick.
MAX_TRAIL_LENGTH: int = 120
TRAIL_FADE_RATE: float = 0.01
