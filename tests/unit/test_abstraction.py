"""
Tests for item records and board geometry.
"""

import math

import pytest

from stickerwall.board.abstraction import (
    BoardBounds,
    Decoration,
    Footprint,
    Item,
    ItemKind,
    footprint_for,
    photo_strip_footprint,
)


class TestItemKind:
    """Test kind parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("badge", ItemKind.BADGE),
        ("stickyNote", ItemKind.STICKY_NOTE),
        ("photo", ItemKind.PHOTO_STRIP),
        ("sticky_note", ItemKind.STICKY_NOTE),
        ("ID_CARD", ItemKind.ID_CARD),
        (ItemKind.MAP_PIN, ItemKind.MAP_PIN),
    ])
    def test_parse(self, raw, expected):
        """Wire names and enum names should both parse."""
        assert ItemKind.parse(raw) == expected

    def test_parse_unknown(self):
        """Unknown kinds should raise."""
        with pytest.raises(ValueError, match="Unknown item kind"):
            ItemKind.parse("poster")


class TestDecoration:
    """Test decoration parsing."""

    def test_none_values(self):
        """None and empty string mean no decoration."""
        assert Decoration.parse(None) == Decoration.NONE
        assert Decoration.parse("") == Decoration.NONE

    def test_case_insensitive(self):
        assert Decoration.parse("TAPE") == Decoration.TAPE

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown decoration"):
            Decoration.parse("glitter")


class TestFootprints:
    """Test item sizes."""

    def test_fixed_kinds(self):
        """Fixed-size kinds should use their table entry."""
        assert footprint_for(ItemKind.BADGE) == Footprint(225.0, 225.0)
        assert footprint_for(ItemKind.STICKY_NOTE) == Footprint(170.0, 170.0)
        assert footprint_for(ItemKind.ID_CARD) == Footprint(340.0, 210.0)
        assert footprint_for(ItemKind.MAP_PIN) == Footprint(32.0, 32.0)

    def test_photo_strip_grows_with_images(self):
        """Each photo should add one frame and one gap."""
        assert photo_strip_footprint(1) == Footprint(116.0, 136.0)
        assert photo_strip_footprint(3) == Footprint(116.0, 16.0 + 360.0 + 16.0)

    def test_empty_photo_strip_has_placeholder(self):
        """An empty strip should be as tall as a one-photo strip."""
        assert footprint_for(ItemKind.PHOTO_STRIP, {"images": []}) == photo_strip_footprint(1)
        assert footprint_for(ItemKind.PHOTO_STRIP) == photo_strip_footprint(1)

    def test_single_image_string(self):
        """A bare image string should count as one photo."""
        fp = footprint_for(ItemKind.PHOTO_STRIP, {"images": "a.png"})
        assert fp == photo_strip_footprint(1)


class TestItem:
    """Test item records."""

    def test_unplaced(self):
        """An item without coordinates should have no bounding box."""
        item = Item(id=1, kind=ItemKind.BADGE)
        assert not item.is_placed
        assert item.get_bounding_box() is None

    def test_partially_placed(self):
        """One coordinate is not enough to count as placed."""
        assert not Item(id=1, kind=ItemKind.BADGE, x=10.0).is_placed

    def test_bounding_box(self):
        item = Item(id=1, kind=ItemKind.STICKY_NOTE, x=10.0, y=20.0)
        assert item.get_bounding_box() == (10.0, 20.0, 180.0, 190.0)


class TestBoardBounds:
    """Test position containment."""

    def test_badge_range_on_default_board(self, bounds):
        """A badge on an 800px board should be kept within [50, 525]."""
        assert bounds.max_x(225.0) == 525.0
        assert bounds.clamp_x(-100.0, 225.0) == 50.0
        assert bounds.clamp_x(9000.0, 225.0) == 525.0
        assert bounds.clamp_x(300.0, 225.0) == 300.0

    def test_y_floor(self, bounds):
        """y should never go negative and has no upper bound."""
        assert bounds.clamp_y(-5.0) == 0.0
        assert bounds.clamp_y(1e6) == 1e6

    @pytest.mark.parametrize("x,y", [(-100, -100), (0, 0), (300, 700), (1e6, 1e6)])
    def test_clamp_idempotent(self, bounds, x, y):
        """Clamping a clamped position should change nothing."""
        once = bounds.clamp(x, y, 225.0)
        assert bounds.clamp(*once, 225.0) == once
        assert bounds.contains(*once, 225.0)

    def test_non_finite_positions(self, bounds):
        """NaN and infinity should clamp to the lower bounds."""
        assert bounds.clamp(float("nan"), float("nan"), 225.0) == (50.0, 0.0)
        assert bounds.clamp_x(math.inf, 225.0) == 50.0

    def test_narrow_board_lower_bound_wins(self):
        """A board narrower than the item plus margins should pin x to the margin."""
        narrow = BoardBounds(board_width=200.0, margin=50.0)
        assert narrow.clamp_x(120.0, 225.0) == 50.0

    @pytest.mark.parametrize("width", [None, 0, -1, float("nan"), float("inf")])
    def test_from_width_fallback(self, width):
        """Unusable widths should fall back to the default."""
        assert BoardBounds.from_width(width, 800.0, 50.0).board_width == 800.0

    def test_from_width_keeps_valid(self):
        assert BoardBounds.from_width(1280.0).board_width == 1280.0
