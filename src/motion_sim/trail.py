# MIT License (see LICENSE)
"""
Fading position history for visualization.

Each tick an active object pushes its new position. The buffer then:
    1. appends (position, opacity=1.0),
    2. lowers every opacity by the fade rate (the new point included),
    3. drops points whose opacity is ≤ 0,
    4. keeps only the most recent max_length points.

History is stored as parallel float64 arrays and exported as a tuple of
TrailPoint. It is purely visual and never read by the integrator.
"""
from __future__ import annotations

import numpy as np

from .constants import MAX_TRAIL_LENGTH, TRAIL_FADE_RATE
from .types import TrailPoint
from .util import f64


class TrailBuffer:
    """
    Bounded, fading history of one object's positions (oldest first).

    Attributes:
        max_length: Maximum number of retained points.
        fade_rate: Opacity removed from every point per push.
    """

    def __init__(self, max_length: int = MAX_TRAIL_LENGTH, fade_rate: float = TRAIL_FADE_RATE) -> None:
        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")
        self.max_length = int(max_length)
        self.fade_rate = float(fade_rate)
        self._positions = np.zeros(0, dtype=np.float64)
        self._opacity = np.zeros(0, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._positions)

    def push(self, position: float) -> tuple[TrailPoint, ...]:
        """Record a new position and return the resulting trail."""
        positions = np.append(self._positions, f64(position))
        opacity = np.append(self._opacity, 1.0) - self.fade_rate

        keep = opacity > 0
        positions, opacity = positions[keep], opacity[keep]

        self._positions = positions[-self.max_length:]
        self._opacity = opacity[-self.max_length:]
        return self.points()

    def points(self) -> tuple[TrailPoint, ...]:
        """Current trail as immutable points, oldest first."""
        return tuple(
            TrailPoint(position=float(x), opacity=float(o))
            for x, o in zip(self._positions, self._opacity)
        )

    def clear(self) -> None:
        """Drop all history."""
        self._positions = np.zeros(0, dtype=np.float64)
        self._opacity = np.zeros(0, dtype=np.float64)
