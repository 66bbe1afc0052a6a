# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for timing runs.
    - BufferedRenderer: Records state snapshots for playback or export.

Simulations never import this package; adapters read state snapshots only.

Typical usage:
    from physicsim.renderer import DebugRenderer

    renderer = DebugRenderer()
    renderer.render(simulation)
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
