"""Core module - event bus, registries and progress tracking."""

from framekit.core.events.bus import EventBus, EventRecord
from framekit.core.flow.progress import FlowProgressStore
from framekit.core.flow.registry import FlowRegistry
from framekit.core.frames.registry import FrameRegistry
from framekit.core.navigation.handle import NavigatorHandle, NavigatorTable
from framekit.core.runtime import FrameKit, get_runtime, reset_runtime
from framekit.core.store.observable import ObservableStore

__all__ = [
    "EventBus",
    "EventRecord",
    "FlowProgressStore",
    "FlowRegistry",
    "FrameKit",
    "FrameRegistry",
    "NavigatorHandle",
    "NavigatorTable",
    "ObservableStore",
    "get_runtime",
    "reset_runtime",
]
