# MIT License (see LICENSE)
"""
Exception types raised at the boundary of the simulation core.

The integrator itself never raises: every failure mode is either an
out-of-range configuration value or a command issued in the wrong state.
"""
from __future__ import annotations


class ConfigError(ValueError):
    """A motion or global configuration value is missing, non-finite or out of range."""


class SimulationStateError(RuntimeError):
    """A command is not allowed in the controller's current state."""
