"""
Drag Controller

Turns a stream of relative pointer deltas into clamped position writes.

Each active gesture remembers where its item was when the drag began and
the cumulative delta since then; every move writes
``clamp(origin + cumulative delta)`` to the store so the item follows the
pointer live. Gestures are keyed by item id and share no state, so drags on
different items never interfere.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..board.abstraction import ItemId
from ..board.store import ItemStore

logger = logging.getLogger(__name__)


@dataclass
class DragGesture:
    """State of one in-progress drag."""
    item_id: ItemId
    origin_x: float
    origin_y: float
    dx: float = 0.0
    dy: float = 0.0
    last_x: Optional[float] = None
    last_y: Optional[float] = None

    @property
    def candidate(self) -> Tuple[float, float]:
        """Unclamped position the pointer is asking for."""
        return (self.origin_x + self.dx, self.origin_y + self.dy)


class DragController:
    """Applies drag gestures to an ItemStore."""

    def __init__(self, store: ItemStore, is_enabled: Optional[Callable[[], bool]] = None):
        """
        Args:
            store: Store receiving position writes
            is_enabled: Returns False while dragging is disallowed
                (placement mode, view mode)
        """
        self.store = store
        self._is_enabled = is_enabled or (lambda: True)
        self._gestures: Dict[ItemId, DragGesture] = {}

    @property
    def enabled(self) -> bool:
        return bool(self._is_enabled())

    @property
    def active_items(self) -> List[ItemId]:
        return list(self._gestures.keys())

    def is_dragging(self, item_id: ItemId) -> bool:
        return item_id in self._gestures

    def begin(self, item_id: ItemId, origin: Optional[Tuple[float, float]] = None) -> bool:
        """
        Start a drag on an item.

        Args:
            item_id: Item being dragged
            origin: Displayed position to start from when the item has no
                stored coordinates yet (layout-derived)

        Returns:
            True if a gesture was started
        """
        if not self.enabled:
            logger.debug(f"Drag disabled, ignoring begin on {item_id!r}")
            return False

        item = self.store.get(item_id)
        if item is None:
            return False

        if item.is_placed:
            start = (item.x, item.y)
        elif origin is not None:
            start = origin
        else:
            logger.debug(f"Cannot drag unplaced item {item_id!r} without an origin")
            return False

        self._gestures[item_id] = DragGesture(item_id, start[0], start[1])
        return True

    def move(self, item_id: ItemId, dx: float, dy: float) -> Optional[Tuple[float, float]]:
        """
        Apply one pointer delta and write the clamped result.

        Returns:
            The stored position after the write, or None if the delta was
            ignored (no gesture, drag disabled, or the item was deleted)
        """
        gesture = self._gestures.get(item_id)
        if gesture is None or not self.enabled:
            return None

        gesture.dx += dx
        gesture.dy += dy
        return self._write(gesture)

    def end(self, item_id: ItemId) -> Optional[Tuple[float, float]]:
        """Finish a gesture with one final clamp-and-write."""
        gesture = self._gestures.pop(item_id, None)
        if gesture is None:
            return None
        if gesture.last_x is None:
            # No delta ever arrived; nothing moved.
            item = self.store.get(item_id)
            return (item.x, item.y) if item and item.is_placed else None
        return self._write(gesture)

    def cancel(self, item_id: ItemId) -> bool:
        """Drop a gesture without a final write."""
        return self._gestures.pop(item_id, None) is not None

    def cancel_all(self):
        self._gestures.clear()

    def _write(self, gesture: DragGesture) -> Optional[Tuple[float, float]]:
        x, y = gesture.candidate
        if not self.store.update(gesture.item_id, x=x, y=y):
            # Deleted mid-drag: the gesture has nothing left to move.
            self._gestures.pop(gesture.item_id, None)
            return None

        item = self.store.get(gesture.item_id)
        gesture.last_x, gesture.last_y = item.x, item.y
        return (item.x, item.y)
