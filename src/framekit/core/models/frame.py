"""Frame data models."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from framekit.core.navigation.handle import NavigatorHandle

FrameNavigateHandler = Callable[["NavigatorHandle"], None]


@dataclass(eq=False)
class Frame:
    """A single navigable screen within an application's catalog.

    Frames compare by identity. The same object is shared between the frame
    registry and any flow step that references it.
    """

    id: str
    name: str
    description: str | None = None
    tags: list[str] | None = None
    component: Any = None
    params: dict[str, Any] | None = None
    on_navigate: FrameNavigateHandler | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description or any tag."""
        needle = query.lower()
        if needle in self.name.lower():
            return True
        if self.description and needle in self.description.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags or [])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (component and handler are omitted)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags) if self.tags is not None else None,
            "params": self.params,
            "has_custom_navigation": self.on_navigate is not None,
        }


@dataclass
class AppFrames:
    """All frames registered for one application."""

    app_id: str
    app_name: str
    frames: list[Frame] = field(default_factory=list)
    initial_frame_id: str = ""

    def find(self, frame_id: str) -> Frame | None:
        """Return the first frame with frame_id, or None."""
        for frame in self.frames:
            if frame.id == frame_id:
                return frame
        return None

    @property
    def frame_count(self) -> int:
        return len(self.frames)


class FrameMatch(NamedTuple):
    """Search hit: the owning app and the matching frame."""

    app: AppFrames
    frame: Frame


@dataclass(frozen=True)
class FrameNavigationRequest:
    """Payload handed to the global navigation observer."""

    app_id: str
    frame_id: str

    def to_dict(self) -> dict[str, str]:
        return {"app_id": self.app_id, "frame_id": self.frame_id}
