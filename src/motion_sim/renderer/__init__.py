# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text progress bars for debugging.
    - NullRenderer: No-op renderer for benchmarking.
    - BufferedRenderer: Records frames for playback or export.

Renderers only read immutable snapshots.

Typical usage:
    from motion_sim.renderer import DebugRenderer

    controller.subscribe(DebugRenderer().render_snapshot)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
