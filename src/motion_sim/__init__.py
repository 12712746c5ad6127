# MIT License (see LICENSE)
"""
motion_sim - Objects racing along a 1D track under force, friction and drag.

This package provides a deterministic, tick-driven simulation of several
independent objects pushed along a bounded track, intended for teaching
Newton's second law with kinetic/static friction and quadratic air drag.

Main entry points:
    - SimulationController: Owns the object states and the
      IDLE/RUNNING/PAUSED/FINISHED state machine.
    - MotionConfig, GlobalConfig, ObjectSpec: Configuration types.
    - ObjectState, Snapshot: Immutable per-tick output.
    - ManualTickSource: Deterministic host frame source.

Submodules:
    - core: Force models, the integrator, analytic reference solutions.
    - io: JSON lab presets and snapshot export.
    - renderer: Optional snapshot consumers.

Example:
    from motion_sim import SimulationController, ManualTickSource, SimulationStatus

    ticks = ManualTickSource(frame_interval_ms=1000 / 60)
    controller = SimulationController(tick_source=ticks)
    controller.start()
    ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED)
    print(controller.elapsed)
"""
from .controller import SimulationController, SimulationStatus, Snapshot
from .clock import SimulationClock
from .trail import TrailBuffer
from .ticks import ManualTickSource, TickSource
from .types import GlobalConfig, MotionConfig, ObjectSpec, ObjectState, ObjectStatus, TrailPoint
from .errors import ConfigError, SimulationStateError

__all__ = [
    # Simulation
    "SimulationController",
    "SimulationStatus",
    "Snapshot",
    "SimulationClock",
    "TrailBuffer",
    # Host
    "ManualTickSource",
    "TickSource",
    # Types
    "GlobalConfig",
    "MotionConfig",
    "ObjectSpec",
    "ObjectState",
    "ObjectStatus",
    "TrailPoint",
    # Errors
    "ConfigError",
    "SimulationStateError",
]
