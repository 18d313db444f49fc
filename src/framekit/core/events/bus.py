"""Synchronous event bus with bounded history."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import uuid4

import structlog

from framekit.core.events.types import WILDCARD

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_HISTORY = 100


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_event_id() -> str:
    return f"evt_{uuid4()}"


def event_name_of(name: str | Enum) -> str:
    """Plain string name for a literal name or an event enum member."""
    if isinstance(name, Enum):
        return str(name.value)
    return str(name)


@dataclass(frozen=True)
class EventRecord(Generic[T]):
    """A dispatched event. Immutable once created."""

    name: str
    payload: T
    id: str = field(default_factory=_new_event_id)
    timestamp: int = field(default_factory=_now_ms)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "payload": self.payload,
            "timestamp": self.timestamp,
            "source": self.source,
        }


# Type alias for event handlers
EventHandler = Callable[[Any, EventRecord[Any]], None]


class EventBus:
    """
    Publish/subscribe hub for in-process events.

    Dispatch is synchronous: the record is appended to history first, then
    handlers for the exact name run, then wildcard handlers, each group in
    subscription order. Every group is iterated from a snapshot taken when
    that group's notification starts, so handlers may subscribe,
    unsubscribe or dispatch again without disturbing the pass in flight.
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        """
        Initialize the event bus.

        Args:
            max_history: Number of most recent events kept in history
        """
        if max_history < 0:
            raise ValueError("max_history must be >= 0")
        # dict keys give ordered set semantics per event name
        self._handlers: dict[str, dict[EventHandler, None]] = {}
        self._history: deque[EventRecord[Any]] = deque(maxlen=max_history)
        self._stats = {
            "events_dispatched": 0,
            "handlers_invoked": 0,
            "handler_errors": 0,
        }

    def subscribe(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        """
        Subscribe to events.

        Args:
            event_name: Event name, or ``*`` for every event
            handler: Called with ``(payload, record)``

        Returns:
            Unsubscribe function. Calls after the first are no-ops.
        """
        self._handlers.setdefault(event_name_of(event_name), {})[handler] = None
        active = True

        def unsubscribe() -> None:
            nonlocal active
            if not active:
                return
            active = False
            self.unsubscribe(event_name, handler)

        return unsubscribe

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        """
        Unsubscribe a handler. Unknown handlers are ignored.

        Args:
            event_name: Event name the handler was registered under
            handler: Handler to remove
        """
        name = event_name_of(event_name)
        handlers = self._handlers.get(name)
        if handlers is None:
            return
        handlers.pop(handler, None)
        if not handlers:
            del self._handlers[name]

    def dispatch(self, event_name: str, payload: T = None, source: str | None = None) -> EventRecord[T]:
        """
        Record an event and notify its subscribers.

        Args:
            event_name: Event name
            payload: Opaque payload passed to handlers
            source: Optional origin label

        Returns:
            The created record
        """
        name = event_name_of(event_name)
        record: EventRecord[T] = EventRecord(name=name, payload=payload, source=source)

        # deque(maxlen) evicts from the oldest end
        self._history.append(record)
        self._stats["events_dispatched"] += 1

        self._notify(name, record)
        if name != WILDCARD:
            self._notify(WILDCARD, record)

        return record

    def _notify(self, group: str, record: EventRecord[Any]) -> None:
        handlers = self._handlers.get(group)
        if not handlers:
            return
        for handler in list(handlers):
            self._invoke_handler(handler, record)

    def _invoke_handler(self, handler: EventHandler, record: EventRecord[Any]) -> None:
        """Invoke a single handler with error handling."""
        try:
            self._stats["handlers_invoked"] += 1
            handler(record.payload, record)
        except Exception as e:
            self._stats["handler_errors"] += 1
            logger.exception(
                "Event handler error",
                handler=getattr(handler, "__name__", repr(handler)),
                event_name=record.name,
                event_id=record.id,
                error=str(e),
            )

    def get_history(self, names: str | Iterable[str] | None = None) -> list[EventRecord[Any]]:
        """
        Get a copy of the event history, oldest first.

        Args:
            names: Optional event name or names to keep

        Returns:
            List of records
        """
        if names is None:
            return list(self._history)
        if isinstance(names, (str, Enum)):
            wanted = {event_name_of(names)}
        else:
            wanted = {event_name_of(n) for n in names}
        return [record for record in self._history if record.name in wanted]

    def clear_history(self) -> None:
        self._history.clear()

    @property
    def max_history(self) -> int:
        return self._history.maxlen or 0

    def set_max_history(self, max_history: int) -> None:
        """Change the history bound, dropping the oldest records if over it."""
        if max_history < 0:
            raise ValueError("max_history must be >= 0")
        self._history = deque(self._history, maxlen=max_history)

    def handler_count(self, event_name: str | None = None) -> int:
        """Number of handlers for one event name, or for all names."""
        if event_name is None:
            return sum(len(h) for h in self._handlers.values())
        return len(self._handlers.get(event_name_of(event_name), {}))

    def clear_handlers(self) -> None:
        self._handlers.clear()

    def reset(self) -> None:
        """Drop all handlers and history."""
        self.clear_handlers()
        self.clear_history()

    @property
    def stats(self) -> dict[str, int]:
        """Get event bus statistics."""
        return self._stats.copy()


__all__ = ["DEFAULT_MAX_HISTORY", "EventBus", "EventHandler", "EventRecord", "event_name_of"]
