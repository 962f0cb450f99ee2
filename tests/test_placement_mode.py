"""
Tests for placement-mode item creation.
"""

import pytest

from stickerwall.api.placement_mode import (
    DEFAULT_PAYLOADS,
    PlacementController,
    PlacementMode,
    board_point,
    has_explicit_position,
)
from stickerwall.board.abstraction import ItemKind


@pytest.fixture
def controller(store, config):
    return PlacementController(store, config)


class TestHelpers:
    """Test coordinate helpers."""

    @pytest.mark.parametrize("x,y,expected", [
        (10.0, 10.0, True),
        (0.0, 10.0, False),
        (10.0, 0.0, False),
        (-5.0, 10.0, False),
        (None, 10.0, False),
    ])
    def test_has_explicit_position(self, x, y, expected):
        assert has_explicit_position(x, y) is expected

    def test_board_point(self):
        """Client coordinates lose the board offset and padding and gain scroll."""
        assert board_point(300, 200, rect_left=20, rect_top=40, scroll_top=500) == (230.0, 610.0)

    def test_mode_kinds(self):
        assert PlacementMode.BADGE.kind == ItemKind.BADGE
        assert PlacementMode.PHOTO.kind == ItemKind.PHOTO_STRIP
        assert PlacementMode.NONE.kind is None


class TestClick:
    """Test clicks while a mode is armed."""

    def test_inactive(self, controller, store):
        result = controller.click(100, 100)
        assert not result.success
        assert len(store) == 0

    def test_creates_at_click(self, controller, store):
        controller.arm(PlacementMode.STICKY_NOTE)
        result = controller.click(120.0, 340.0)

        assert result.success
        assert result.position == (120.0, 340.0)
        assert not result.used_fallback
        item = store.get(result.item_id)
        assert item.kind == ItemKind.STICKY_NOTE
        assert item.payload == DEFAULT_PAYLOADS[ItemKind.STICKY_NOTE]

    def test_mode_resets(self, controller):
        controller.arm(PlacementMode.BADGE)
        controller.click(100.0, 100.0)
        assert not controller.is_active
        assert not controller.click(100.0, 100.0).success

    def test_click_on_item(self, controller, store):
        """A click that lands on an existing item creates nothing."""
        controller.arm(PlacementMode.BADGE)
        result = controller.click(100.0, 100.0, on_item=True)
        assert not result.success
        assert controller.is_active
        assert len(store) == 0

    def test_click_clamped(self, controller, store):
        controller.arm(PlacementMode.BADGE)
        result = controller.click(790.0, 50.0)
        assert result.position == (525.0, 50.0)

    def test_payload_merged(self, controller, store):
        controller.arm(PlacementMode.BADGE)
        result = controller.click(100.0, 100.0, payload={"label": "Gig"})
        assert store.get(result.item_id).payload == {"label": "Gig", "title": "Event"}

    def test_defaults_not_shared(self, controller, store):
        """Editing one new photo strip should not leak into the defaults."""
        controller.arm(PlacementMode.PHOTO)
        result = controller.click(100.0, 100.0)
        store.update_payload(result.item_id, images=["x.png"])
        assert DEFAULT_PAYLOADS[ItemKind.PHOTO_STRIP] == {"images": []}


class TestFallback:
    """Test clicks without usable coordinates."""

    def test_empty_wall(self, controller, store):
        controller.arm(PlacementMode.BADGE)
        result = controller.click(0, 0)

        assert result.success
        assert result.used_fallback
        assert result.position == (400.0 - 112.5, 450.0)

    def test_below_existing(self, populated_store):
        controller = PlacementController(populated_store)
        controller.arm(PlacementMode.STICKY_NOTE)
        result = controller.click(None, None)
        assert result.position == (400.0 - 85.0, 1400.0 + 350.0)
