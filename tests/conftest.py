"""Global test fixtures for framekit."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from framekit.core.events.bus import EventBus
from framekit.core.flow.progress import FlowProgressStore
from framekit.core.flow.registry import FlowRegistry
from framekit.core.frames.registry import FrameRegistry, create_frame
from framekit.core.models.frame import Frame
from framekit.core.navigation.handle import NavigatorHandle, NavigatorTable
from framekit.core.runtime import FrameKit, reset_runtime
from framekit.core.storage.backends import MemoryBackend

# ============================================================================
# BUS AND REGISTRIES
# ============================================================================


@pytest.fixture
def bus() -> EventBus:
    """Fresh event bus with the default history bound."""
    return EventBus()


@pytest.fixture
def navigators() -> NavigatorTable:
    return NavigatorTable()


@pytest.fixture
def frame_registry(navigators: NavigatorTable) -> FrameRegistry:
    return FrameRegistry(navigators)


@pytest.fixture
def flow_registry() -> FlowRegistry:
    return FlowRegistry()


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def progress_store(memory_backend: MemoryBackend) -> FlowProgressStore:
    return FlowProgressStore(backend=memory_backend)


@pytest.fixture
def runtime(memory_backend: MemoryBackend):
    """Runtime instance disposed after the test."""
    rt = FrameKit.create(backend=memory_backend)
    yield rt
    rt.dispose()


@pytest.fixture(autouse=True)
def _reset_global_runtime():
    yield
    reset_runtime()


# ============================================================================
# SAMPLE DATA
# ============================================================================


@pytest.fixture
def home_frame() -> Frame:
    return create_frame(
        "home",
        "1.1 Home",
        "Restaurant list with search",
        tags=["main"],
    )


@pytest.fixture
def menu_frame() -> Frame:
    return create_frame("menu", "1.2 Menu", "Restaurant menu", tags=["catalog"])


@pytest.fixture
def checkout_frame() -> Frame:
    return create_frame("checkout", "1.3 Checkout", tags=["Payment", "cart"])


@pytest.fixture
def customer_frames(home_frame: Frame, menu_frame: Frame, checkout_frame: Frame) -> list[Frame]:
    return [home_frame, menu_frame, checkout_frame]


@pytest.fixture
def mock_navigator() -> MagicMock:
    """Navigator handle with every action mocked."""
    return MagicMock(spec=NavigatorHandle)
