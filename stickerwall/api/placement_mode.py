"""
Placement Mode

While a placement mode is armed, the next click on the board background
creates an item of that kind at the click position; the mode then resets.
Clicks that carry no usable coordinates (x or y not positive) fall back to
the layout engine's fallback placement.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..board.abstraction import ItemId, ItemKind, footprint_for
from ..board.store import ItemStore
from ..config import WallConfig
from ..placement.layout import fallback_position

logger = logging.getLogger(__name__)


class PlacementMode(Enum):
    """What the next board click creates."""
    NONE = "none"
    BADGE = "badge"
    STICKY_NOTE = "stickyNote"
    PHOTO = "photo"

    @property
    def kind(self) -> Optional[ItemKind]:
        return _MODE_KINDS.get(self)


_MODE_KINDS = {
    PlacementMode.BADGE: ItemKind.BADGE,
    PlacementMode.STICKY_NOTE: ItemKind.STICKY_NOTE,
    PlacementMode.PHOTO: ItemKind.PHOTO_STRIP,
}

# Content a freshly placed item starts with until it is edited
DEFAULT_PAYLOADS: Dict[ItemKind, Dict[str, Any]] = {
    ItemKind.BADGE: {"label": "Event", "title": "Event"},
    ItemKind.STICKY_NOTE: {"text": "New Note", "color": "yellow"},
    ItemKind.PHOTO_STRIP: {"images": []},
}


@dataclass
class PlacementResult:
    """Result of a placement click."""
    success: bool
    message: str
    item_id: Optional[ItemId] = None
    position: Optional[Tuple[float, float]] = None
    used_fallback: bool = False


def has_explicit_position(x: Optional[float], y: Optional[float]) -> bool:
    """A click position counts only when both coordinates are positive."""
    return x is not None and y is not None and x > 0 and y > 0


def board_point(client_x: float, client_y: float, rect_left: float, rect_top: float,
                scroll_top: float = 0.0, padding: float = 50.0) -> Tuple[float, float]:
    """Convert a client-space click into board coordinates.

    Subtracts the board's inner padding and adds the scroll offset.
    """
    return (client_x - rect_left - padding,
            client_y - rect_top + scroll_top - padding)


class PlacementController:
    """Routes board clicks into item creation while a mode is armed."""

    def __init__(self, store: ItemStore, config: Optional[WallConfig] = None):
        self.store = store
        self.config = config or WallConfig()
        self.mode = PlacementMode.NONE

    @property
    def is_active(self) -> bool:
        return self.mode != PlacementMode.NONE

    def arm(self, mode: PlacementMode):
        """Enter a placement mode (``PlacementMode.NONE`` cancels)."""
        self.mode = PlacementMode(mode)
        logger.debug(f"Placement mode: {self.mode.value}")

    def cancel(self):
        self.mode = PlacementMode.NONE

    def click(
        self,
        x: Optional[float],
        y: Optional[float],
        payload: Optional[Dict[str, Any]] = None,
        on_item: bool = False,
    ) -> PlacementResult:
        """
        Handle a board click.

        Args:
            x, y: Click position in board coordinates
            payload: Content for the new item; defaults per kind
            on_item: True if the click landed on an existing item, which
                never creates anything

        Returns:
            PlacementResult describing what (if anything) was created
        """
        if not self.is_active:
            return PlacementResult(False, "Not in placement mode")
        if on_item:
            return PlacementResult(False, "Click landed on an existing item")

        kind = self.mode.kind
        content = deepcopy(DEFAULT_PAYLOADS.get(kind, {}))
        content.update(payload or {})

        explicit = has_explicit_position(x, y)
        if explicit:
            position = (x, y)
        else:
            position = fallback_position(
                self.store.list(),
                footprint_for(kind, content),
                self.store.bounds.board_width,
                self.config,
            )

        item_id = self.store.create(kind, payload=content, position=position)
        self.mode = PlacementMode.NONE

        stored = self.store.get(item_id)
        return PlacementResult(
            True,
            f"Placed {kind.value} {item_id} at ({stored.x:.1f}, {stored.y:.1f})",
            item_id=item_id,
            position=(stored.x, stored.y),
            used_fallback=not explicit,
        )
