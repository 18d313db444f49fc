"""Data models."""

from framekit.core.models.config import EventsConfig, LoggingConfig, Settings, StorageConfig
from framekit.core.models.flow import Flow, FlowProgress, FlowStep, completion_percent
from framekit.core.models.frame import (
    AppFrames,
    Frame,
    FrameMatch,
    FrameNavigateHandler,
    FrameNavigationRequest,
)

__all__ = [
    "AppFrames",
    "EventsConfig",
    "Flow",
    "FlowProgress",
    "FlowStep",
    "Frame",
    "FrameMatch",
    "FrameNavigateHandler",
    "FrameNavigationRequest",
    "LoggingConfig",
    "Settings",
    "StorageConfig",
    "completion_percent",
]
