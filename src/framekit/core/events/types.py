"""Event name definitions."""

from enum import Enum

WILDCARD = "*"


class SystemEvent(str, Enum):
    """Events dispatched by the framekit runtime itself."""

    FRAME_NAVIGATE = "frame:navigate"
    FLOW_PROGRESS = "flow:progress"
    FLOW_PROGRESS_RESET = "flow:progress_reset"
