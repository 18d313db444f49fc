"""Process-wide container wiring the bus and registries together."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from framekit.core.events.bus import EventBus, EventHandler, EventRecord
from framekit.core.events.types import SystemEvent
from framekit.core.flow.progress import FlowProgressStore
from framekit.core.flow.registry import FlowRegistry
from framekit.core.frames.registry import FrameRegistry
from framekit.core.models.config import Settings
from framekit.core.models.frame import FrameNavigationRequest
from framekit.core.navigation.handle import NavigatorTable
from framekit.core.storage.backends import StorageBackend, create_backend

logger = structlog.get_logger(__name__)


class FrameKit:
    """
    Owns one event bus, frame registry, navigator table, flow registry and
    progress store.

    Tests build a fresh instance each; production code shares the one
    returned by get_runtime(). The runtime installs a navigation observer
    that republishes every navigation request as a ``frame:navigate``
    event, and the progress store publishes ``flow:progress``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        backend: StorageBackend | None = None,
    ) -> None:
        """
        Initialize the runtime.

        Args:
            settings: Configuration (environment defaults when omitted)
            backend: Progress backend overriding settings.storage
        """
        self.settings = settings or Settings()
        self.events = EventBus(max_history=self.settings.events.max_history)
        self.navigators = NavigatorTable()
        self.frames = FrameRegistry(self.navigators)
        self.flows = FlowRegistry()

        if backend is None:
            backend = create_backend(
                self.settings.storage.backend,
                self.settings.storage.directory,
            )
        self.progress = FlowProgressStore(
            backend=backend,
            key_prefix=self.settings.storage.key_prefix,
            events=self.events,
        )
        self.frames.set_navigation_callback(self._publish_navigation)
        self._disposed = False

    @classmethod
    def create(cls, settings: Settings | None = None, backend: StorageBackend | None = None) -> FrameKit:
        runtime = cls(settings=settings, backend=backend)
        logger.info(
            "Runtime created",
            storage_backend=type(runtime.progress.backend).__name__,
            max_history=runtime.events.max_history,
        )
        return runtime

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _publish_navigation(self, request: FrameNavigationRequest) -> None:
        self.events.dispatch(SystemEvent.FRAME_NAVIGATE, request.to_dict(), source="frames")

    # Shortcuts for the most common calls

    def dispatch(self, event_name: str, payload: Any = None, source: str | None = None) -> EventRecord[Any]:
        return self.events.dispatch(event_name, payload, source)

    def subscribe(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        return self.events.subscribe(event_name, handler)

    def navigate_to_frame(self, app_id: str, frame_id: str) -> bool:
        return self.frames.navigate_to_frame(app_id, frame_id)

    def dispose(self) -> None:
        """Drop all handlers, registrations and session state."""
        if self._disposed:
            return
        self.frames.set_navigation_callback(None)
        # Detach store listeners first so clearing does not notify them
        for store in (self.frames, self.navigators, self.flows, self.progress):
            store.clear_listeners()
        self.frames.clear()
        self.navigators.clear()
        self.flows.clear()
        self.progress.forget()
        self.events.reset()
        self._disposed = True
        logger.info("Runtime disposed")


# Global runtime instance
_runtime: FrameKit | None = None


def get_runtime(settings: Settings | None = None) -> FrameKit:
    """Get the process-wide runtime, creating it on first use."""
    global _runtime
    if _runtime is None or _runtime.is_disposed:
        _runtime = FrameKit.create(settings)
    return _runtime


def reset_runtime() -> None:
    """Dispose the process-wide runtime; the next get_runtime() builds a new one."""
    global _runtime
    if _runtime is not None:
        _runtime.dispose()
    _runtime = None
