"""Navigator handles supplied by the navigation stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import structlog

from framekit.core.store.observable import ObservableStore

logger = structlog.get_logger(__name__)


@runtime_checkable
class NavigatorHandle(Protocol):
    """Navigation actions for one application."""

    def navigate(self, name: str, params: dict[str, Any] | None = None) -> None: ...

    def go_back(self) -> None: ...

    def replace(self, name: str, params: dict[str, Any] | None = None) -> None: ...

    def reset(self, name: str | None = None) -> None: ...


class NavigatorTable(ObservableStore[str, NavigatorHandle]):
    """One navigator handle per application id.

    Registering again for the same app replaces the previous handle.
    """

    def __init__(self) -> None:
        super().__init__(name="navigators")

    def register_navigator(self, app_id: str, handle: NavigatorHandle) -> None:
        if app_id in self:
            logger.debug("Navigator replaced", app_id=app_id)
        self.register(app_id, handle)

    def unregister_navigator(self, app_id: str) -> None:
        self.unregister(app_id)

    def get_navigator(self, app_id: str) -> NavigatorHandle | None:
        return self.get(app_id)


@dataclass
class Route:
    """Entry on a RecordingNavigator stack."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


class RecordingNavigator:
    """In-memory navigation stack.

    Used where no real navigation stack is mounted, such as in tests.
    """

    def __init__(self, initial: str | None = None) -> None:
        self.stack: list[Route] = [Route(initial)] if initial else []
        self.actions: list[tuple[str, str | None]] = []

    @property
    def current(self) -> Route | None:
        return self.stack[-1] if self.stack else None

    def navigate(self, name: str, params: dict[str, Any] | None = None) -> None:
        self.actions.append(("navigate", name))
        self.stack.append(Route(name, dict(params or {})))

    def go_back(self) -> None:
        self.actions.append(("go_back", None))
        if len(self.stack) > 1:
            self.stack.pop()

    def replace(self, name: str, params: dict[str, Any] | None = None) -> None:
        self.actions.append(("replace", name))
        if self.stack:
            self.stack.pop()
        self.stack.append(Route(name, dict(params or {})))

    def reset(self, name: str | None = None) -> None:
        """Replace the whole stack with name as the root (or clear it)."""
        self.actions.append(("reset", name))
        self.stack = [Route(name)] if name else []
