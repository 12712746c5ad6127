# MIT License (see LICENSE)
"""
Core type definitions for the 1D track simulation.

Defines the fundamental data structures:
- MotionConfig / GlobalConfig: per-object and lab-wide parameters.
- ObjectSpec: identity of a tracked object plus its motion config.
- TrailPoint / ObjectState: the per-tick kinematic state of one object.

All types are frozen dataclasses. The controller advances the simulation by
building new instances, so any snapshot handed to a consumer stays valid
no matter what the controller does next.

The equations of motion follow Newton's second law along the track axis:
  dx/dt = v
  dv/dt = F_net / m
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .constants import REST_VELOCITY_EPS


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class MotionConfig:
    """
    Physical parameters of a single object.

    Attributes:
        force: Applied force along the track in Newtons (N).
        mass: Mass in kg. Always > 0 once validated.
        friction_coeff: Kinetic friction coefficient μ. Static friction is
                        μ multiplied by STATIC_FRICTION_MULTIPLIER.
        drag_coeff: Quadratic air resistance coefficient k, F_drag = k·v·|v|.
        initial_velocity: Velocity at reset in m/s.
    """
    force: float
    mass: float
    friction_coeff: float = 0.0
    drag_coeff: float = 0.0
    initial_velocity: float = 0.0


@dataclass(frozen=True)
class GlobalConfig:
    """
    Lab-wide parameters shared by all objects.

    Attributes:
        track_length: Finish line distance in meters, shared by all objects.
        time_scale: Simulation seconds per real second.
    """
    track_length: float = 300.0
    time_scale: float = 1.0


@dataclass(frozen=True)
class ObjectSpec:
    """
    Identity of a tracked object and the config it starts every run with.

    Attributes:
        id: Stable identifier, used to order snapshots.
        config: Motion parameters applied on every reset.
        name: Display name for renderers.
        color: Display color (hex string) for renderers.
    """
    id: str
    config: MotionConfig
    name: str = ""
    color: str = "#ffffff"


# =============================================================================
# Kinematic state
# =============================================================================

class ObjectStatus(str, Enum):
    """Coarse motion status derived from an ObjectState."""
    MOVING = "MOVING"
    LOCKED = "LOCKED"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class TrailPoint:
    """A single faded position sample. Opacity is in (0, 1]."""
    position: float
    opacity: float


@dataclass(frozen=True)
class ObjectState:
    """
    Kinematic state of one object at the end of a tick.

    Attributes:
        id: Identifier of the ObjectSpec this state belongs to.
        config: Snapshot of the MotionConfig used to produce this state.
        position: Distance from the start line in meters, within [0, track_length].
        velocity: Signed velocity in m/s.
        acceleration: Signed acceleration in m/s² from the last step.
        trail: Recent positions, oldest first, most recent last.
        finished: True once the object has reached the finish line.

    Note:
        Once finished, velocity and acceleration are 0 until the next reset.
    """
    id: str
    config: MotionConfig
    position: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0
    trail: tuple[TrailPoint, ...] = field(default_factory=tuple)
    finished: bool = False

    @classmethod
    def initial(cls, spec: ObjectSpec) -> "ObjectState":
        """Fresh state for a reset: at the start line, moving at the configured initial velocity."""
        return cls(id=spec.id, config=spec.config, velocity=float(spec.config.initial_velocity))

    @property
    def status(self) -> ObjectStatus:
        """FINISHED, LOCKED (at rest) or MOVING."""
        if self.finished:
            return ObjectStatus.FINISHED
        if abs(self.velocity) < REST_VELOCITY_EPS:
            return ObjectStatus.LOCKED
        return ObjectStatus.MOVING
