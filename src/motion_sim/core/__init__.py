# MIT License (see LICENSE)
"""
Core physics for motion along the track.

This subpackage provides:
    - Force models: kinetic/static friction, quadratic drag, net force.
    - Integrator: pure semi-implicit Euler step with the reversal guard.
    - Analytic reference solutions and invariant checks.

Typical usage:
    from motion_sim.core import motion_step

    step = motion_step(position=0.0, velocity=0.0, config=cfg, dt=1/60, track_length=300.0)
"""
from .forces import (
    kinetic_friction,
    static_friction_limit,
    quadratic_drag,
    net_force,
)
from .integrators import MotionStep, motion_step, integrate
from .analytic import (
    terminal_velocity,
    quadratic_drag_velocity,
    quadratic_drag_position,
)
from .invariants import kinetic_energy, linear_momentum, state_violations

__all__ = [
    # Forces
    "kinetic_friction",
    "static_friction_limit",
    "quadratic_drag",
    "net_force",
    # Integrator
    "MotionStep",
    "motion_step",
    "integrate",
    # Analytic reference
    "terminal_velocity",
    "quadratic_drag_velocity",
    "quadratic_drag_position",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "state_violations",
]
