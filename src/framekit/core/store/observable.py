"""Keyed store with synchronous change listeners."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")

Listener = Callable[[], None]


class ObservableStore(Generic[K, V]):
    """
    Ordered key/value mapping that notifies listeners after each mutation.

    Listeners are called synchronously once the mutation is committed.
    Notification walks a snapshot of the listener list, so a listener may
    subscribe or unsubscribe (itself or others) without skipping or
    repeating calls in the pass that is in flight.
    """

    def __init__(self, name: str = "store") -> None:
        self.name = name
        self._items: dict[K, V] = {}
        # dict keeps insertion order and gives set semantics
        self._listeners: dict[Listener, None] = {}

    def register(self, key: K, value: V) -> None:
        """Store value under key, replacing any previous value wholesale.

        A replaced key keeps its original position in iteration order.
        """
        self._items[key] = value
        self.notify()

    def unregister(self, key: K) -> bool:
        """Remove key. Listeners are notified even when the key was absent."""
        removed = self._items.pop(key, None) is not None
        self.notify()
        return removed

    def get(self, key: K) -> V | None:
        return self._items.get(key)

    def get_all(self) -> list[V]:
        return list(self._items.values())

    def keys(self) -> list[K]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()
        self.notify()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[V]:
        return iter(list(self._items.values()))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Add a change listener.

        Args:
            listener: Zero-argument callable

        Returns:
            Unsubscribe function, safe to call more than once
        """
        self._listeners[listener] = None

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def clear_listeners(self) -> None:
        self._listeners.clear()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self) -> None:
        """Call every current listener once."""
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.exception(
                    "Store listener error",
                    store=self.name,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                )
