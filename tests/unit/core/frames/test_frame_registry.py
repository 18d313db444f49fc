"""Tests for FrameRegistry registration, lookup and search."""

from __future__ import annotations

import pytest

from framekit.core.frames.registry import (
    FrameDefinitionError,
    FrameRegistry,
    create_frame,
    define_frames,
)
from framekit.core.models.frame import Frame

# ============================================================================
# REGISTRATION
# ============================================================================


class TestRegisterFrames:
    """Tests for register_frames / unregister_frames."""

    def test_register_and_get_app_frames(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")

        app = frame_registry.get_app_frames("customer")
        assert app is not None
        assert app.app_name == "Customer App"
        assert app.initial_frame_id == "home"
        assert [f.id for f in app.frames] == ["home", "menu", "checkout"]

    def test_register_again_replaces_wholesale(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        replacement = [Frame(id="profile", name="Profile")]

        frame_registry.register_frames("customer", "Customer v2", replacement, "profile")

        app = frame_registry.get_app_frames("customer")
        assert app.app_name == "Customer v2"
        assert app.frames == replacement
        assert frame_registry.get_frame("customer", "home") is None

    def test_registration_notifies_once(self, frame_registry: FrameRegistry, customer_frames):
        calls = []
        frame_registry.subscribe(lambda: calls.append(1))

        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")

        assert calls == [1]

    def test_unregister(self, frame_registry: FrameRegistry, customer_frames):
        calls = []
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        frame_registry.subscribe(lambda: calls.append(1))

        frame_registry.unregister_frames("customer")

        assert frame_registry.get_app_frames("customer") is None
        assert calls == [1]

    def test_unregister_missing_app_is_silent(self, frame_registry: FrameRegistry):
        frame_registry.unregister_frames("nobody")
        assert frame_registry.get_all_apps() == []

    def test_frames_list_is_copied(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        customer_frames.clear()

        assert frame_registry.get_app_frames("customer").frame_count == 3

    def test_frame_count_and_clear(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        frame_registry.register_frames("admin", "Admin", [Frame(id="dash", name="Dashboard")], "dash")

        assert frame_registry.get_frame_count() == 4

        frame_registry.clear()
        assert frame_registry.get_frame_count() == 0


# ============================================================================
# LOOKUP
# ============================================================================


class TestGetFrame:
    """Tests for get_frame."""

    def test_returns_same_object(self, frame_registry: FrameRegistry, customer_frames, menu_frame):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        assert frame_registry.get_frame("customer", "menu") is menu_frame

    def test_missing_app_or_frame(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")

        assert frame_registry.get_frame("nobody", "home") is None
        assert frame_registry.get_frame("customer", "nothing") is None

    def test_duplicate_ids_resolve_to_first(self, frame_registry: FrameRegistry):
        first = Frame(id="dup", name="First")
        frame_registry.register_frames("a", "A", [first, Frame(id="dup", name="Second")], "dup")

        assert frame_registry.get_frame("a", "dup") is first


# ============================================================================
# SEARCH
# ============================================================================


class TestSearchFrames:
    """Tests for search_frames."""

    def test_search_by_name_description_and_tag(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")

        assert [m.frame.id for m in frame_registry.search_frames("HOME")] == ["home"]
        assert [m.frame.id for m in frame_registry.search_frames("restaurant")] == ["home", "menu"]
        assert [m.frame.id for m in frame_registry.search_frames("payment")] == ["checkout"]

    def test_multi_field_match_appears_once(self, frame_registry: FrameRegistry):
        frame = Frame(id="menu", name="Menu", description="menu page", tags=["menu"])
        frame_registry.register_frames("a", "A", [frame], "menu")

        assert len(frame_registry.search_frames("menu")) == 1

    def test_results_in_registration_order(self, frame_registry: FrameRegistry):
        frame_registry.register_frames("b", "B", [Frame(id="x1", name="Settings")], "x1")
        frame_registry.register_frames("a", "A", [Frame(id="y1", name="Settings"), Frame(id="y2", name="More settings")], "y1")

        matches = frame_registry.search_frames("settings")

        assert [(m.app.app_id, m.frame.id) for m in matches] == [("b", "x1"), ("a", "y1"), ("a", "y2")]

    def test_replaced_app_keeps_its_position(self, frame_registry: FrameRegistry):
        frame_registry.register_frames("b", "B", [Frame(id="x", name="Item")], "x")
        frame_registry.register_frames("a", "A", [Frame(id="y", name="Item")], "y")
        frame_registry.register_frames("b", "B2", [Frame(id="z", name="Item")], "z")

        assert [m.frame.id for m in frame_registry.search_frames("item")] == ["z", "y"]

    def test_no_matches(self, frame_registry: FrameRegistry, customer_frames):
        frame_registry.register_frames("customer", "Customer App", customer_frames, "home")
        assert frame_registry.search_frames("zzz") == []


# ============================================================================
# HELPERS
# ============================================================================


class TestDefineFrames:
    """Tests for create_frame / define_frames."""

    def test_create_frame_copies_tags(self):
        tags = ["a"]
        frame = create_frame("home", "Home", tags=tags)
        tags.append("b")

        assert frame.tags == ["a"]

    def test_define_frames_registers(self, frame_registry: FrameRegistry, customer_frames):
        app = define_frames(frame_registry, "customer", "Customer App", customer_frames, "home")
        assert frame_registry.get_app_frames("customer") is app

    def test_empty_app_id_rejected(self, frame_registry: FrameRegistry, customer_frames):
        with pytest.raises(FrameDefinitionError):
            define_frames(frame_registry, "", "Customer App", customer_frames, "home")

    def test_unknown_initial_frame_rejected(self, frame_registry: FrameRegistry, customer_frames):
        with pytest.raises(FrameDefinitionError, match="initial frame"):
            define_frames(frame_registry, "customer", "Customer App", customer_frames, "nope")
        assert frame_registry.get_app_frames("customer") is None

    def test_duplicate_ids_allowed(self, frame_registry: FrameRegistry):
        frames = [Frame(id="dup", name="A"), Frame(id="dup", name="B")]
        app = define_frames(frame_registry, "a", "A", frames, "dup")
        assert app.frame_count == 2
