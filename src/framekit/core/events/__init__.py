"""Event system for decoupled communication."""

from framekit.core.events.bus import (
    DEFAULT_MAX_HISTORY,
    EventBus,
    EventHandler,
    EventRecord,
    event_name_of,
)
from framekit.core.events.define import EventDefinition, EventSet, create_event, define_events
from framekit.core.events.handlers import BusHandler, CounterHandler, LoggingHandler
from framekit.core.events.types import WILDCARD, SystemEvent

__all__ = [
    "DEFAULT_MAX_HISTORY",
    "WILDCARD",
    "BusHandler",
    "CounterHandler",
    "EventBus",
    "EventDefinition",
    "EventHandler",
    "EventRecord",
    "EventSet",
    "LoggingHandler",
    "SystemEvent",
    "create_event",
    "define_events",
    "event_name_of",
]
