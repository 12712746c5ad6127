# MIT License (see LICENSE)
"""
Per-tick motion integrator for objects on a bounded track.

This module advances one object by one timestep. It solves the 1D
equations of motion
    dx/dt = v,    dv/dt = F_net(v) / m
with semi-implicit (symplectic) Euler:
    v(t+dt) = v(t) + a(t)·dt
    x(t+dt) = x(t) + v(t+dt)·dt

Both entry points are pure: identical inputs give bit-identical outputs,
and nothing outside the returned value is touched. This allows
deterministic replay and direct unit testing.

Available functions:
- motion_step: scalar step (position, velocity, config, dt, track_length).
- integrate: ObjectState → ObjectState wrapper used by the controller.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from dataclasses import dataclass, replace

from ..constants import GRAVITY, REST_VELOCITY_EPS, STATIC_FRICTION_MULTIPLIER
from ..types import MotionConfig, ObjectState
from ..util import sign
from .forces import net_force


@dataclass(frozen=True)
class MotionStep:
    """Result of one integration step, before any trail update."""
    position: float
    velocity: float
    acceleration: float
    finished: bool = False


def motion_step(
    position: float,
    velocity: float,
    config: MotionConfig,
    dt: float,
    track_length: float,
    gravity: float = GRAVITY,
    static_friction_multiplier: float = STATIC_FRICTION_MULTIPLIER,
) -> MotionStep:
    """
    Advance a single object by dt.

    Friction and drag can bring a moving object to a stop but cannot
    reverse it within one step. If the trial velocity v' = v + (F_net/m)·dt
    changes sign and |v'| > REST_VELOCITY_EPS, the net force is replaced by
    the force that stops the object exactly at the end of the step:
        F_net = -v·m/dt
    The replacement is skipped when dt == 0.

    Boundary policy:
        x ≥ track_length → x = track_length, finished, v = a = 0.
        x < 0            → x = 0 (hard stop, velocity left as computed).

    Args:
        position: Current position in meters.
        velocity: Current signed velocity in m/s.
        config: Validated motion parameters (mass > 0).
        dt: Timestep in seconds (≥ 0).
        track_length: Finish line distance in meters.
        gravity: Gravitational acceleration in m/s².
        static_friction_multiplier: Ratio μs/μk.

    Returns:
        The next position, velocity, acceleration and finished flag.
    """
    mass = config.mass
    f_net = net_force(config, velocity, gravity, static_friction_multiplier)

    if abs(velocity) >= REST_VELOCITY_EPS and dt != 0:
        v_trial = velocity + (f_net / mass) * dt
        if sign(v_trial) != sign(velocity) and abs(v_trial) > REST_VELOCITY_EPS:
            f_net = -velocity * mass / dt

    acceleration = f_net / mass

    # Semi-implicit Euler: new velocity drives the position update
    new_velocity = velocity + acceleration * dt
    new_position = position + new_velocity * dt

    if new_position >= track_length:
        return MotionStep(position=float(track_length), velocity=0.0, acceleration=0.0, finished=True)
    if new_position < 0:
        new_position = 0.0

    return MotionStep(position=new_position, velocity=new_velocity, acceleration=acceleration)


def integrate(
    state: ObjectState,
    dt: float,
    track_length: float,
    gravity: float = GRAVITY,
    static_friction_multiplier: float = STATIC_FRICTION_MULTIPLIER,
) -> ObjectState:
    """
    Advance an ObjectState by dt using its own config snapshot.

    Finished states are returned unchanged. The trail is carried over
    untouched; appending to it is the trail buffer's job.
    """
    if state.finished:
        return state

    step = motion_step(
        state.position,
        state.velocity,
        state.config,
        dt,
        track_length,
        gravity,
        static_friction_multiplier,
    )
    return replace(
        state,
        position=step.position,
        velocity=step.velocity,
        acceleration=step.acceleration,
        finished=step.finished,
    )
