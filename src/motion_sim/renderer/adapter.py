# MIT License (see LICENSE)
"""
Renderer adapters consuming simulation snapshots.

This module provides an abstract base class for rendering and several
concrete implementations. The simulation has no rendering dependency.
Renderers subscribe to the controller and only ever see immutable
Snapshot objects, so they cannot disturb an in-progress run.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO
import sys

from ..types import ObjectState

if TYPE_CHECKING:
    from ..controller import Snapshot


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a concrete backend
    (terminal, matplotlib, a web canvas, ...).

    Usage:
        renderer = MyRenderer()
        controller.subscribe(renderer.render_snapshot)

    Or, by hand:
        renderer.begin_frame(snap.elapsed, snap.status.value)
        for state in snap.objects:
            renderer.draw_object(state, snap.track_length)
        renderer.end_frame()
    """

    @abstractmethod
    def begin_frame(self, elapsed: float, status: str) -> None:
        """
        Begin a new frame.

        Args:
            elapsed: Accumulated simulation time in seconds.
            status: Controller status name.
        """
        ...

    @abstractmethod
    def draw_object(self, state: ObjectState, track_length: float) -> None:
        """
        Draw a single object and its trail.

        Args:
            state: The object state to draw.
            track_length: Finish distance, for scaling.
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_snapshot(self, snap: "Snapshot") -> None:
        """Render every object of a snapshot. Suitable as a subscriber callback."""
        self.begin_frame(snap.elapsed, snap.status.value)
        for state in snap.objects:
            self.draw_object(state, snap.track_length)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and headless runs.

    Writes one line per object with a progress bar along the track.

    Output:
        === t=2.5000s RUNNING ===
        [pink]  |#########-----------|  150.00 m  v= 38.21 m/s  a=  5.02 m/s²  MOVING
    """

    def __init__(self, output: TextIO | None = None, width: int = 20, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            width: Number of characters in the progress bar.
            verbose: If True, include velocity, acceleration and status.
        """
        self.output = output or sys.stdout
        self.width = width
        self.verbose = verbose

    def begin_frame(self, elapsed: float, status: str) -> None:
        self.output.write(f"=== t={elapsed:.4f}s {status} ===\n")

    def draw_object(self, state: ObjectState, track_length: float) -> None:
        filled = int(round(self.width * state.position / track_length)) if track_length > 0 else 0
        bar = "#" * filled + "-" * (self.width - filled)
        line = f"[{state.id}]  |{bar}|  {state.position:7.2f} m"
        if self.verbose:
            line += (
                f"  v={state.velocity:6.2f} m/s  a={state.acceleration:6.2f} m/s²"
                f"  {state.status.value}"
            )
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer.

    Useful as a placeholder or for benchmarking without rendering overhead.
    """

    def begin_frame(self, elapsed: float, status: str) -> None:
        pass

    def draw_object(self, state: ObjectState, track_length: float) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frame data for later retrieval.

    Example:
        renderer = BufferedRenderer()
        controller.subscribe(renderer.render_snapshot)
        ...
        for frame in renderer.frames:
            print(frame["elapsed"], [o["position"] for o in frame["objects"]])
    """

    def __init__(self, include_trails: bool = False):
        self.include_trails = include_trails
        self.frames: list[dict[str, Any]] = []
        self._current_frame: dict[str, Any] | None = None

    def begin_frame(self, elapsed: float, status: str) -> None:
        self._current_frame = {"elapsed": elapsed, "status": status, "objects": []}

    def draw_object(self, state: ObjectState, track_length: float) -> None:
        if self._current_frame is None:
            return
        record = {
            "id": state.id,
            "position": state.position,
            "velocity": state.velocity,
            "acceleration": state.acceleration,
            "finished": state.finished,
        }
        if self.include_trails:
            record["trail"] = [(p.position, p.opacity) for p in state.trail]
        self._current_frame["objects"].append(record)

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
