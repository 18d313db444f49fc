"""Per-application catalog of navigable frames."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from framekit.core.models.frame import (
    AppFrames,
    Frame,
    FrameMatch,
    FrameNavigateHandler,
    FrameNavigationRequest,
)
from framekit.core.navigation.handle import NavigatorHandle, NavigatorTable
from framekit.core.store.observable import Listener, ObservableStore

logger = structlog.get_logger(__name__)

NavigationCallback = Callable[[FrameNavigationRequest], None]


class FrameDefinitionError(ValueError):
    """Raised by define_frames for a malformed app definition."""


class FrameRegistry:
    """
    Catalog of frames keyed by application id.

    Registration replaces an app's entry wholesale and notifies subscribers
    once. Lookups never raise; a miss returns None.
    """

    def __init__(self, navigators: NavigatorTable | None = None) -> None:
        """
        Initialize frame registry.

        Args:
            navigators: Handle table consulted by navigate_to_frame.
                A private table is created when omitted.
        """
        self._apps: ObservableStore[str, AppFrames] = ObservableStore(name="frames")
        self.navigators = navigators if navigators is not None else NavigatorTable()
        self._navigation_callback: NavigationCallback | None = None

    # Registration

    def register_frames(
        self,
        app_id: str,
        app_name: str,
        frames: Iterable[Frame],
        initial_frame_id: str,
    ) -> AppFrames:
        """Register (or replace) all frames of an app."""
        app = AppFrames(
            app_id=app_id,
            app_name=app_name,
            frames=list(frames),
            initial_frame_id=initial_frame_id,
        )
        self._apps.register(app_id, app)
        logger.debug("Frames registered", app_id=app_id, frame_count=app.frame_count)
        return app

    def unregister_frames(self, app_id: str) -> None:
        self._apps.unregister(app_id)

    def clear(self) -> None:
        self._apps.clear()

    def clear_listeners(self) -> None:
        self._apps.clear_listeners()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._apps.subscribe(listener)

    # Lookup

    def get_all_apps(self) -> list[AppFrames]:
        return self._apps.get_all()

    def get_app_frames(self, app_id: str) -> AppFrames | None:
        return self._apps.get(app_id)

    def get_frame(self, app_id: str, frame_id: str) -> Frame | None:
        """First frame with frame_id in the app, or None."""
        app = self._apps.get(app_id)
        if app is None:
            return None
        return app.find(frame_id)

    def get_frame_count(self) -> int:
        return sum(app.frame_count for app in self._apps)

    def search_frames(self, query: str) -> list[FrameMatch]:
        """
        Find frames whose name, description or tags contain query.

        Args:
            query: Case-insensitive substring

        Returns:
            Matches in app registration order, then frame order
        """
        return [
            FrameMatch(app=app, frame=frame)
            for app in self._apps
            for frame in app.frames
            if frame.matches(query)
        ]

    # Navigation

    def register_navigator(self, app_id: str, handle: NavigatorHandle) -> None:
        self.navigators.register_navigator(app_id, handle)

    def unregister_navigator(self, app_id: str) -> None:
        self.navigators.unregister_navigator(app_id)

    def set_navigation_callback(self, callback: NavigationCallback | None) -> None:
        """Set the single global navigation observer, replacing any previous one."""
        self._navigation_callback = callback

    def navigate_to_frame(self, app_id: str, frame_id: str) -> bool:
        """
        Navigate an app to one of its frames.

        A frame's custom handler runs instead of the default stack reset.
        Nothing happens when the frame or the app's navigator is missing.
        The navigation observer is told about every request either way.

        Args:
            app_id: Application id
            frame_id: Frame id within the app

        Returns:
            True if a navigation action was performed
        """
        frame = self.get_frame(app_id, frame_id)
        handle = self.navigators.get_navigator(app_id)
        navigated = False

        if frame is not None and handle is not None:
            try:
                if frame.on_navigate is not None:
                    frame.on_navigate(handle)
                else:
                    handle.reset(frame_id)
                navigated = True
            except Exception as e:
                logger.exception(
                    "Frame navigation failed",
                    app_id=app_id,
                    frame_id=frame_id,
                    error=str(e),
                )
        else:
            logger.debug(
                "Navigation skipped",
                app_id=app_id,
                frame_id=frame_id,
                frame_found=frame is not None,
                navigator_found=handle is not None,
            )

        callback = self._navigation_callback
        if callback is not None:
            try:
                callback(FrameNavigationRequest(app_id=app_id, frame_id=frame_id))
            except Exception as e:
                logger.exception("Navigation callback error", app_id=app_id, frame_id=frame_id, error=str(e))

        return navigated


def create_frame(
    id: str,
    name: str,
    description: str | None = None,
    *,
    component: Any = None,
    tags: Iterable[str] | None = None,
    params: dict[str, Any] | None = None,
    on_navigate: FrameNavigateHandler | None = None,
) -> Frame:
    """
    Create a reusable frame object.

    The returned frame can be passed to define_frames and to define_flow;
    both registries then hold the very same object.
    """
    return Frame(
        id=id,
        name=name,
        description=description,
        tags=list(tags) if tags is not None else None,
        component=component,
        params=params,
        on_navigate=on_navigate,
    )


def define_frames(
    registry: FrameRegistry,
    app_id: str,
    app_name: str,
    frames: Iterable[Frame],
    initial_frame_id: str,
) -> AppFrames:
    """
    Validate and register an app's frames.

    Raises:
        FrameDefinitionError: If app_id is empty or initial_frame_id is
            not one of the frames
    """
    frames = list(frames)
    if not app_id:
        raise FrameDefinitionError("app_id must not be empty")
    frame_ids = [frame.id for frame in frames]
    if initial_frame_id not in frame_ids:
        raise FrameDefinitionError(
            f"initial frame '{initial_frame_id}' is not defined for app '{app_id}'"
        )
    duplicates = sorted({fid for fid in frame_ids if frame_ids.count(fid) > 1})
    if duplicates:
        # Lookups resolve to the first frame with a given id
        logger.warning("Duplicate frame ids", app_id=app_id, frame_ids=duplicates)
    return registry.register_frames(app_id, app_name, frames, initial_frame_id)
