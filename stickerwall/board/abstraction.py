"""
Board Abstraction Layer

Item records and board geometry shared by the layout engine, the item
store and the render-side components. Everything here works in board
pixel coordinates with the origin at the top-left of the scrollable wall.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union
import math

ItemId = Union[int, str]


class ItemKind(Enum):
    """Placeable item variants."""
    BADGE = "badge"
    STICKY_NOTE = "stickyNote"
    PHOTO_STRIP = "photo"
    MAP_PIN = "mapPin"
    ID_CARD = "idCard"

    @classmethod
    def parse(cls, value: Union[str, "ItemKind"]) -> "ItemKind":
        """Parse a kind from its wire name (``"badge"``, ``"stickyNote"``...)."""
        if isinstance(value, cls):
            return value
        for kind in cls:
            if kind.value == value or kind.name.lower() == str(value).lower():
                return kind
        raise ValueError(f"Unknown item kind: {value!r}")


class Decoration(Enum):
    """Cosmetic overlay attached to an item."""
    NONE = "none"
    PIN = "pin"
    TAPE = "tape"
    MAGNET = "magnet"

    @classmethod
    def parse(cls, value: Union[None, str, "Decoration"]) -> "Decoration":
        """Parse a decoration; ``None`` and ``""`` mean no decoration."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.NONE
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown decoration: {value!r}") from None


@dataclass(frozen=True)
class Footprint:
    """Rendered size of an item (px)."""
    width: float
    height: float


# Photo strip geometry: bordered column of fixed-size photos
STRIP_BORDER = 8.0
STRIP_PHOTO_WIDTH = 100.0
STRIP_PHOTO_HEIGHT = 120.0

KIND_FOOTPRINTS: Dict[ItemKind, Footprint] = {
    ItemKind.BADGE: Footprint(225.0, 225.0),
    ItemKind.STICKY_NOTE: Footprint(170.0, 170.0),
    ItemKind.ID_CARD: Footprint(340.0, 210.0),
    ItemKind.MAP_PIN: Footprint(32.0, 32.0),
}


def photo_strip_footprint(image_count: int) -> Footprint:
    """Footprint of a photo strip holding ``image_count`` photos.

    An empty strip still renders one placeholder frame.
    """
    count = max(1, image_count)
    width = STRIP_BORDER * 2 + STRIP_PHOTO_WIDTH
    height = STRIP_BORDER * 2 + count * STRIP_PHOTO_HEIGHT + (count - 1) * STRIP_BORDER
    return Footprint(width, height)


def footprint_for(kind: ItemKind, payload: Optional[Dict[str, Any]] = None) -> Footprint:
    """Footprint for an item kind, using the payload where size depends on content."""
    if kind == ItemKind.PHOTO_STRIP:
        images = (payload or {}).get("images") or []
        if isinstance(images, str):
            images = [images]
        return photo_strip_footprint(len(images))
    return KIND_FOOTPRINTS[kind]


@dataclass
class Item:
    """A placeable decorative object on the wall."""
    id: ItemId
    kind: ItemKind
    x: Optional[float] = None  # px, top-left
    y: Optional[float] = None
    rotation: Optional[float] = None  # degrees
    decoration: Decoration = Decoration.NONE
    recency: Optional[int] = None  # lower = more prominent
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_placed(self) -> bool:
        """True once both coordinates are stored."""
        return self.x is not None and self.y is not None

    @property
    def footprint(self) -> Footprint:
        return footprint_for(self.kind, self.payload)

    def get_bounding_box(self) -> Optional[Tuple[float, float, float, float]]:
        """
        Get the axis-aligned box of the item body.

        Returns:
            (min_x, min_y, max_x, max_y), or None while the item is unplaced
        """
        if not self.is_placed:
            return None
        fp = self.footprint
        return (self.x, self.y, self.x + fp.width, self.y + fp.height)


@dataclass(frozen=True)
class BoardBounds:
    """Horizontal containment and vertical floor for item positions.

    x is kept within ``[margin, board_width - item_width - margin]`` and y
    within ``[0, inf)``. When the board is narrower than an item plus both
    margins the lower bound wins.
    """
    board_width: float = 800.0
    margin: float = 50.0

    @classmethod
    def from_width(cls, board_width: Optional[float], default_width: float = 800.0,
                   margin: float = 50.0) -> "BoardBounds":
        """Build bounds, substituting ``default_width`` for a missing/zero width."""
        if not board_width or board_width <= 0 or not math.isfinite(board_width):
            board_width = default_width
        return cls(board_width=board_width, margin=margin)

    def max_x(self, item_width: float) -> float:
        return max(self.margin, self.board_width - item_width - self.margin)

    def clamp_x(self, x: float, item_width: float) -> float:
        if not math.isfinite(x):
            return self.margin
        return max(self.margin, min(self.max_x(item_width), x))

    def clamp_y(self, y: float) -> float:
        if not math.isfinite(y):
            return 0.0
        return max(0.0, y)

    def clamp(self, x: float, y: float, item_width: float) -> Tuple[float, float]:
        """Clamp a top-left position for an item of the given width."""
        return self.clamp_x(x, item_width), self.clamp_y(y)

    def contains(self, x: float, y: float, item_width: float) -> bool:
        """Check whether a position already satisfies the bounds."""
        return self.margin <= x <= self.max_x(item_width) and y >= 0
