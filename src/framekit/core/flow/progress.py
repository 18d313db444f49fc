"""Per-flow completion state with best-effort persistence."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from framekit.core.events.types import SystemEvent
from framekit.core.models.flow import Flow, FlowProgress
from framekit.core.storage.backends import NullBackend, StorageBackend
from framekit.core.storage.result import Err, Ok, Result
from framekit.core.store.observable import Listener, ObservableStore

if TYPE_CHECKING:
    from framekit.core.events.bus import EventBus

logger = structlog.get_logger(__name__)

DEFAULT_KEY_PREFIX = "framekit-flow-progress-"


class FlowProgressStore:
    """
    Reads and writes FlowProgress records.

    Every mutation writes the whole record for that flow right away. Read
    problems (missing or corrupt records) yield empty progress and write
    problems are logged and dropped. Progress touched during this session
    is also kept in memory, which stays authoritative when writes fail.
    """

    def __init__(
        self,
        backend: StorageBackend | None = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        events: EventBus | None = None,
    ) -> None:
        """
        Initialize progress store.

        Args:
            backend: Durable key-value store. Without one the store runs
                in memory only.
            key_prefix: Prefix for the per-flow storage key
            events: Bus notified after each progress change
        """
        self.backend: StorageBackend = backend if backend is not None else NullBackend()
        self.key_prefix = key_prefix
        self.events = events
        self._session: ObservableStore[str, FlowProgress] = ObservableStore(name="progress")

    def key_for(self, flow_id: str) -> str:
        return f"{self.key_prefix}{flow_id}"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._session.subscribe(listener)

    # Reads

    def get_flow_progress(self, flow_id: str) -> FlowProgress:
        """Current progress for flow_id, empty if none could be read."""
        cached = self._session.get(flow_id)
        if cached is not None:
            return cached.copy()
        return self._load(flow_id)

    def _load(self, flow_id: str) -> FlowProgress:
        key = self.key_for(flow_id)
        result = self._read(key)
        if isinstance(result, Err):
            logger.warning("Progress read failed", key=key, error=result.reason)
            return FlowProgress.empty(flow_id)
        if result.value is None:
            return FlowProgress.empty(flow_id)
        # json.loads raises RecursionError on very deeply nested input
        try:
            return FlowProgress.from_json(flow_id, result.value)
        except (ValueError, RecursionError) as e:
            logger.warning("Discarding corrupt progress record", key=key, error=str(e))
            return FlowProgress.empty(flow_id)

    def _read(self, key: str) -> Result[str | None]:
        try:
            return self.backend.get(key)
        except Exception as e:
            return Err(str(e))

    def is_step_complete(self, flow_id: str, step_index: int) -> bool:
        return self.get_flow_progress(flow_id).is_step_complete(step_index)

    def is_task_complete(self, flow_id: str, step_index: int, task_index: int) -> bool:
        return self.get_flow_progress(flow_id).is_task_complete(step_index, task_index)

    def completion(self, flow: Flow) -> int:
        """Completion percent of flow against its current step list."""
        return self.get_flow_progress(flow.id).percent_for(flow)

    # Writes

    def toggle_step_complete(self, flow_id: str, step_index: int) -> FlowProgress:
        """Flip completion of one step. Applying it twice is a no-op."""
        progress = self.get_flow_progress(flow_id)
        progress.completed_steps ^= {step_index}
        return self._commit(progress)

    def toggle_task_complete(self, flow_id: str, step_index: int, task_index: int) -> FlowProgress:
        """Flip completion of one task within a step."""
        progress = self.get_flow_progress(flow_id)
        tasks = progress.completed_tasks.setdefault(step_index, set())
        tasks ^= {task_index}
        return self._commit(progress)

    def reset_flow_progress(self, flow_id: str) -> FlowProgress:
        """Clear progress and persist the empty record."""
        return self._commit(FlowProgress.empty(flow_id), SystemEvent.FLOW_PROGRESS_RESET)

    def save_flow_progress(self, progress: FlowProgress) -> FlowProgress:
        """Replace the stored progress for progress.flow_id."""
        return self._commit(progress.copy())

    def _commit(
        self,
        progress: FlowProgress,
        event: SystemEvent = SystemEvent.FLOW_PROGRESS,
    ) -> FlowProgress:
        self._persist(progress)
        self._session.register(progress.flow_id, progress)
        if self.events is not None:
            self.events.dispatch(event, progress.to_dict(), source="flow_progress")
        return progress.copy()

    def _persist(self, progress: FlowProgress) -> bool:
        key = self.key_for(progress.flow_id)
        try:
            result = self.backend.set(key, progress.to_json())
        except Exception as e:
            result = Err(str(e))

        if isinstance(result, Ok):
            return True
        logger.warning("Progress write failed", key=key, error=result.reason)
        return False

    def clear_listeners(self) -> None:
        self._session.clear_listeners()

    def forget(self) -> None:
        """Drop the in-memory session state (persisted records are kept)."""
        self._session.clear()
