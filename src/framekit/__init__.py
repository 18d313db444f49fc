"""framekit - event bus and reactive frame/flow registries."""

__version__ = "0.1.0"

from framekit.core.events import SystemEvent, define_events
from framekit.core.frames import create_frame, define_frames
from framekit.core.models import Flow, FlowProgress, FlowStep, Frame
from framekit.core.runtime import FrameKit, get_runtime, reset_runtime

__all__ = [
    "Flow",
    "FlowProgress",
    "FlowStep",
    "Frame",
    "FrameKit",
    "SystemEvent",
    "__version__",
    "create_frame",
    "define_events",
    "define_frames",
    "get_runtime",
    "reset_runtime",
]
