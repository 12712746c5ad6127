# MIT License (see LICENSE)
"""
Simulation clock: host timestamps in, scaled simulation dt out.

The host delivers a monotonically increasing timestamp (milliseconds) once
per frame. The first timestamp after the clock is (re)armed only records a
baseline and yields dt = 0, so resuming after a pause never produces a
catch-up step that spans the paused interval. Frame-to-frame variation is
passed through unclamped, scaled by time_scale.

Example:
    clock = SimulationClock(time_scale=1.0)
    clock.advance(1000.0)   # -> 0.0 (baseline)
    clock.advance(1016.0)   # -> 0.016
    clock.clear()           # next advance() is a baseline again
"""
from __future__ import annotations


class SimulationClock:
    """
    Converts host timestamps into simulation time deltas.

    Attributes:
        time_scale: Simulation seconds per real second. May be changed at
                    any time; it only affects future deltas.
    """

    def __init__(self, time_scale: float = 1.0) -> None:
        self.time_scale = float(time_scale)
        self._last: float | None = None

    @property
    def armed(self) -> bool:
        """True once a baseline timestamp has been recorded."""
        return self._last is not None

    def advance(self, timestamp: float) -> float:
        """
        Consume a host timestamp and return the simulation dt in seconds.

        Args:
            timestamp: Host time in milliseconds.

        Returns:
            0.0 on the first call after clear(), otherwise
            (timestamp - last) / 1000 · time_scale.

        Raises:
            ValueError: If timestamp is earlier than the previous one.
        """
        timestamp = float(timestamp)
        if self._last is None:
            self._last = timestamp
            return 0.0
        if timestamp < self._last:
            raise ValueError(f"Timestamp went backwards: {timestamp} < {self._last}")
        dt = (timestamp - self._last) / 1000 * self.time_scale
        self._last = timestamp
        return dt

    def clear(self) -> None:
        """Forget the baseline; the next advance() returns 0."""
        self._last = None
