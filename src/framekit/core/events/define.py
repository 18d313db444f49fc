"""Typed event definitions.

Each event name is bound to a payload type once, and dispatching through
the definition checks the payload against that type at the call site.

    events = define_events(bus, {"order:created": OrderCreated})
    events["order:created"].dispatch(OrderCreated(order_id="123"))
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from framekit.core.events.bus import EventBus, EventRecord, event_name_of

T = TypeVar("T")


@dataclass(frozen=True)
class EventDefinition(Generic[T]):
    """Dispatcher bound to one event name and payload type."""

    bus: EventBus
    name: str
    payload_type: type[Any] | None = None

    def _check(self, payload: Any) -> None:
        if self.payload_type is not None and not isinstance(payload, self.payload_type):
            raise TypeError(
                f"Event '{self.name}' expects {self.payload_type.__name__}, "
                f"got {type(payload).__name__}"
            )

    def dispatch(self, payload: T, source: str | None = None) -> EventRecord[T]:
        self._check(payload)
        return self.bus.dispatch(self.name, payload, source)

    __call__ = dispatch

    def subscribe(self, handler: Callable[[T, EventRecord[T]], None]) -> Callable[[], None]:
        return self.bus.subscribe(self.name, handler)

    def history(self) -> list[EventRecord[Any]]:
        return self.bus.get_history(self.name)


class EventSet(Mapping[str, EventDefinition[Any]]):
    """Explicit mapping from event name to its typed definition."""

    def __init__(self, definitions: dict[str, EventDefinition[Any]]) -> None:
        self._definitions = definitions

    def __getitem__(self, name: str) -> EventDefinition[Any]:
        return self._definitions[event_name_of(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


def create_event(bus: EventBus, name: str, payload_type: type[T] | None = None) -> EventDefinition[T]:
    """Create a single typed dispatcher."""
    return EventDefinition(bus=bus, name=event_name_of(name), payload_type=payload_type)


def define_events(bus: EventBus, schema: Mapping[str, type[Any] | None]) -> EventSet:
    """
    Create typed dispatchers for several events.

    Args:
        bus: Bus the dispatchers publish to
        schema: Event name to payload type (None skips the check)

    Returns:
        EventSet keyed by event name
    """
    return EventSet(
        {event_name_of(name): create_event(bus, name, payload_type) for name, payload_type in schema.items()}
    )
