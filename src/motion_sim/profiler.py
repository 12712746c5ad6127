# MIT License (see LICENSE)
"""
Lightweight timing instrumentation for controller ticks.

The controller times its tick phases (clock, integrate, trails) when
given a Profiler, without any external dependencies.

Example:
    profiler = Profiler()
    controller = SimulationController(profiler=profiler)
    ...
    print(profiler.stats.summary()["integrate"])
"""
from __future__ import annotations
import time
from dataclasses import dataclass, field


@dataclass
class ProfileStats:
    """
    Timing samples per named phase.

    Stores raw durations in seconds and summarizes them on demand.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, seconds: float) -> None:
        self.samples.setdefault(name, []).append(seconds)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase statistics.

        Returns:
            Dict mapping phase name to:
            - 'n': sample count
            - 'mean_ms': average duration in milliseconds
            - 'max_ms': longest duration in milliseconds
            - 'total_ms': summed duration in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class _Section:
    def __init__(self, stats: ProfileStats, name: str) -> None:
        self._stats = stats
        self._name = name
        self._t0 = 0.0

    def __enter__(self) -> "_Section":
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._stats.add(self._name, time.perf_counter() - self._t0)


class Profiler:
    """
    Context-manager based profiler.

    Usage:
        with profiler.section("integrate"):
            step_all_objects()
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str) -> _Section:
        """Context manager that records the duration of its body under name."""
        return _Section(self.stats, name)
