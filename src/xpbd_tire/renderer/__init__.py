# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for headless runs.
    - BufferedRenderer: Records ring snapshots per frame.

Typical usage:
    from xpbd_tire.renderer import DebugRenderer

    DebugRenderer().render_scene(scene)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
    ring_snapshot,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
    "ring_snapshot",
]
