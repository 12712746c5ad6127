# MIT License (see LICENSE)
"""
Utilities for calculating physical quantities and checking state invariants.

Used for verifying simulation correctness in tests and examples. Without
friction, drag and applied force, kinetic energy and momentum should stay
constant until an object reaches a boundary.
"""
from __future__ import annotations
from collections.abc import Sequence

import numpy as np

from ..constants import MAX_TRAIL_LENGTH
from ..types import ObjectState


def kinetic_energy(states: Sequence[ObjectState]) -> float:
    """
    Total kinetic energy of a set of objects.

    T = Σ 0.5·m·v²

    Returns:
        Total kinetic energy in Joules.
    """
    if not states:
        return 0.0
    m = np.array([s.config.mass for s in states], dtype=np.float64)
    v = np.array([s.velocity for s in states], dtype=np.float64)
    return float(0.5 * np.dot(m, v * v))


def linear_momentum(states: Sequence[ObjectState]) -> float:
    """
    Total linear momentum along the track.

    P = Σ m·v

    Returns:
        Momentum in kg·m/s.
    """
    if not states:
        return 0.0
    m = np.array([s.config.mass for s in states], dtype=np.float64)
    v = np.array([s.velocity for s in states], dtype=np.float64)
    return float(np.dot(m, v))


def state_violations(state: ObjectState, track_length: float) -> list[str]:
    """
    List every invariant an ObjectState breaks (empty when consistent).

    Checks:
        0 ≤ position ≤ track_length
        finished → velocity == acceleration == 0
        len(trail) ≤ MAX_TRAIL_LENGTH, every opacity in (0, 1]
    """
    problems = []
    if not (0.0 <= state.position <= track_length):
        problems.append(f"{state.id}: position {state.position} outside [0, {track_length}]")
    if state.finished and (state.velocity != 0.0 or state.acceleration != 0.0):
        problems.append(f"{state.id}: finished but v={state.velocity}, a={state.acceleration}")
    if len(state.trail) > MAX_TRAIL_LENGTH:
        problems.append(f"{state.id}: trail length {len(state.trail)} > {MAX_TRAIL_LENGTH}")
    for p in state.trail:
        if not (0.0 < p.opacity <= 1.0):
            problems.append(f"{state.id}: trail opacity {p.opacity} outside (0, 1]")
            break
    return problems
