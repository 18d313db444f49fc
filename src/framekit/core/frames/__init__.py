"""Frame registry."""

from framekit.core.frames.registry import (
    FrameDefinitionError,
    FrameRegistry,
    NavigationCallback,
    create_frame,
    define_frames,
)

__all__ = [
    "FrameDefinitionError",
    "FrameRegistry",
    "NavigationCallback",
    "create_frame",
    "define_frames",
]
