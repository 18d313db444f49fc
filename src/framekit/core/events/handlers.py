"""Reusable bus handler classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from framekit.core.events.bus import event_name_of
from framekit.core.events.types import WILDCARD

if TYPE_CHECKING:
    from framekit.core.events.bus import EventBus, EventRecord


class BusHandler(ABC):
    """Base class for handlers attached to an EventBus."""

    @property
    @abstractmethod
    def handled_events(self) -> list[str]:
        """Event names this handler processes (empty means every event)."""
        ...

    @abstractmethod
    def handle(self, record: EventRecord[Any]) -> None:
        """
        Handle an event.

        Args:
            record: The dispatched record
        """
        ...

    def __call__(self, payload: Any, record: EventRecord[Any]) -> None:
        """Make handler callable with the bus handler signature."""
        names = self.handled_events
        if not names or record.name in names:
            self.handle(record)

    def attach(self, bus: EventBus) -> Callable[[], None]:
        """
        Subscribe to bus for every handled event.

        Returns:
            Function detaching the handler from all of its subscriptions
        """
        names = self.handled_events or [WILDCARD]
        unsubscribers = [bus.subscribe(name, self) for name in names]

        def detach() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return detach


class LoggingHandler(BusHandler):
    """Handler that logs events."""

    def __init__(self, event_names: list[str] | None = None) -> None:
        """
        Initialize logging handler.

        Args:
            event_names: Event names to log (None for all)
        """
        self._event_names = [event_name_of(n) for n in event_names or []]
        self._logger = structlog.get_logger(__name__)

    @property
    def handled_events(self) -> list[str]:
        return self._event_names

    def handle(self, record: EventRecord[Any]) -> None:
        """Log the event."""
        self._logger.info(
            "Event received",
            event_id=record.id,
            event_name=record.name,
            source=record.source,
            payload=record.payload,
        )


class CounterHandler(BusHandler):
    """Counts dispatched events per name."""

    def __init__(self, event_names: list[str] | None = None) -> None:
        self._event_names = [event_name_of(n) for n in event_names or []]
        self._counters: dict[str, int] = {}

    @property
    def handled_events(self) -> list[str]:
        return self._event_names

    def handle(self, record: EventRecord[Any]) -> None:
        self._counters[record.name] = self._counters.get(record.name, 0) + 1

    def get_counts(self) -> dict[str, int]:
        return self._counters.copy()

    def reset(self) -> None:
        self._counters.clear()
