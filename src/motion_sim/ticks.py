# MIT License (see LICENSE)
"""
Host tick sources that drive the controller.

The controller never reads a clock or sleeps on its own. It asks a tick
source for the next frame with request_next_tick(callback), and the source
later calls callback(timestamp_ms) exactly once. Pausing or finishing is
done by cancelling the pending request.

ManualTickSource is a deterministic source with a fixed frame interval,
used for headless runs, examples and tests.
"""
from __future__ import annotations
from typing import Callable, Protocol

from .constants import FRAME_RATE

TickCallback = Callable[[float], None]


class TickSource(Protocol):
    """Anything that can schedule one callback per display frame."""

    def request_next_tick(self, callback: TickCallback) -> int:
        """Schedule callback for the next frame and return a cancellation handle."""
        ...

    def cancel_tick(self, handle: int) -> None:
        """Cancel a pending request. Unknown or already-fired handles are ignored."""
        ...


class ManualTickSource:
    """
    Tick source advanced explicitly by the caller.

    Every fired frame advances the timestamp by frame_interval_ms. A frame
    with no pending request still advances time, like a display refresh
    that nobody asked to observe.

    Example:
        ticks = ManualTickSource(frame_interval_ms=1000 / 60)
        controller = SimulationController(tick_source=ticks)
        controller.start()
        ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED)
    """

    def __init__(self, frame_interval_ms: float = 1000 / FRAME_RATE, start_ms: float = 0.0) -> None:
        if frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be positive, got {frame_interval_ms}")
        self.frame_interval_ms = float(frame_interval_ms)
        self.now_ms = float(start_ms)
        self.frames = 0
        self._pending: dict[int, TickCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_next_tick(self, callback: TickCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_tick(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def fire(self) -> None:
        """Advance one frame and deliver it to every pending callback."""
        self.now_ms += self.frame_interval_ms
        self.frames += 1
        # Callbacks scheduled while firing belong to the next frame
        callbacks = list(self._pending.values())
        self._pending.clear()
        for cb in callbacks:
            cb(self.now_ms)

    def run_frames(self, n: int) -> None:
        """Fire n frames."""
        for _ in range(n):
            self.fire()

    def run_until(self, predicate: Callable[[], bool], max_frames: int = 100_000) -> int:
        """
        Fire frames until predicate() is true or nothing is pending.

        Returns:
            Number of frames fired.

        Raises:
            RuntimeError: If max_frames is reached first.
        """
        fired = 0
        while not predicate() and self._pending:
            if fired >= max_frames:
                raise RuntimeError(f"Condition not reached within {max_frames} frames")
            self.fire()
            fired += 1
        return fired
