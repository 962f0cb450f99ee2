"""
Item Store

The authoritative, mutable collection of wall items. Owns identity
assignment, clamped position writes, decoration and payload edits, and the
symmetric "related items" adjacency.

Operations on ids that are not (or no longer) present are no-ops that
return False: UI events routinely race with deletions, so a stale id is an
expected condition rather than an error.
"""

import logging
from copy import deepcopy
from dataclasses import replace
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from .abstraction import BoardBounds, Decoration, Item, ItemId, ItemKind
from ..placement.sequence import ambient_rotation

logger = logging.getLogger(__name__)

FIRST_ITEM_ID = 1000


class ItemStore:
    """
    Insertion-ordered item collection.

    Provides:
    - create/insert/remove with never-reused ids
    - clamped position updates (every write, not just creation)
    - decoration and payload edits
    - symmetric relation links between items
    - a revision counter for caches derived from the store
    """

    def __init__(
        self,
        bounds: Optional[BoardBounds] = None,
        first_id: int = FIRST_ITEM_ID,
        max_rotation: float = 4.0,
        rotation_source: Optional[Callable[[], float]] = None,
    ):
        self.bounds = bounds or BoardBounds()
        self.max_rotation = max_rotation
        self._rotation_source = rotation_source
        self._items: Dict[ItemId, Item] = {}
        self._relations: Dict[ItemId, Set[ItemId]] = {}
        self._next_id = first_id
        self._insertions = 0
        self.revision = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: ItemId) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(self.list())

    def get(self, item_id: ItemId) -> Optional[Item]:
        """Snapshot of one item, or None if unknown."""
        item = self._items.get(item_id)
        return self._snapshot(item) if item else None

    def list(self) -> List[Item]:
        """Snapshots of all items in insertion order."""
        return [self._snapshot(item) for item in self._items.values()]

    def ids(self) -> List[ItemId]:
        return list(self._items.keys())

    # ------------------------------------------------------------------
    # Creation and removal
    # ------------------------------------------------------------------

    def create(
        self,
        kind: ItemKind,
        payload: Optional[Dict[str, Any]] = None,
        position: Optional[Tuple[float, float]] = None,
        rotation: Optional[float] = None,
        decoration: Decoration = Decoration.NONE,
        recency: Optional[int] = None,
        related: Optional[Iterable[ItemId]] = None,
    ) -> ItemId:
        """
        Create a new item and return its id.

        Args:
            kind: Item variant
            payload: Variant content (opaque to the store)
            position: Explicit top-left position; None leaves the item for
                the layout engine to place
            rotation: Explicit rotation; None draws one from ambient randomness
            decoration: Initial decoration
            recency: Rank for z-order; defaults to insertion index
            related: Ids of existing items to link to

        Returns:
            The id assigned to the new item
        """
        item_id = self._next_id
        self._next_id += 1

        if rotation is None:
            rotation = self._creation_rotation()

        item = Item(
            id=item_id,
            kind=ItemKind.parse(kind),
            rotation=rotation,
            decoration=Decoration.parse(decoration),
            recency=recency,
            payload=deepcopy(payload or {}),
        )
        if position is not None:
            item.x, item.y = self.bounds.clamp(position[0], position[1], item.footprint.width)

        self._add(item)
        for other in related or ():
            self.link(item_id, other)

        logger.debug(f"Created {item.kind.value} {item_id} at ({item.x}, {item.y})")
        return item_id

    def insert(self, item: Item, related: Optional[Iterable[ItemId]] = None) -> ItemId:
        """
        Insert an existing record that already carries an id (e.g. from a wall file).

        The stored position is clamped like any other write. Later ``create``
        calls never hand out an id at or below an inserted integer id.
        """
        if item.id in self._items:
            raise ValueError(f"Duplicate item id: {item.id!r}")

        record = deepcopy(item)
        record.kind = ItemKind.parse(record.kind)
        record.decoration = Decoration.parse(record.decoration)
        if record.is_placed:
            record.x, record.y = self.bounds.clamp(record.x, record.y, record.footprint.width)

        self._add(record)
        if isinstance(record.id, int) and not isinstance(record.id, bool):
            self._next_id = max(self._next_id, record.id + 1)

        for other in related or ():
            self.link(record.id, other)
        return record.id

    def remove(self, item_id: ItemId) -> bool:
        """Delete an item immediately. Removing an unknown id is a no-op."""
        if item_id not in self._items:
            logger.debug(f"Ignoring remove of unknown item {item_id!r}")
            return False

        del self._items[item_id]
        for other in self._relations.pop(item_id, set()):
            self._relations.get(other, set()).discard(item_id)
        self._touch()
        logger.debug(f"Removed item {item_id!r}")
        return True

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, item_id: ItemId, x: Optional[float] = None, y: Optional[float] = None) -> bool:
        """
        Write a (partial) position, clamped to the board bounds.

        An unplaced item given only one axis takes the lower bound on the
        other axis.

        Returns:
            True if the item exists and was written
        """
        item = self._items.get(item_id)
        if item is None:
            logger.debug(f"Ignoring update of unknown item {item_id!r}")
            return False
        if x is None and y is None:
            return True

        new_x = x if x is not None else item.x
        new_y = y if y is not None else item.y
        if new_x is None:
            new_x = self.bounds.margin
        if new_y is None:
            new_y = 0.0

        item.x, item.y = self.bounds.clamp(new_x, new_y, item.footprint.width)
        self._touch()
        return True

    def rerandomize_rotation(self, item_id: ItemId) -> bool:
        """Draw a fresh creation-style rotation for an item."""
        item = self._items.get(item_id)
        if item is None:
            return False
        item.rotation = self._creation_rotation()
        self._touch()
        return True

    def set_decoration(self, item_id: ItemId, decoration: Optional[Decoration]) -> bool:
        """Set (or clear, with None) the decoration of an item."""
        item = self._items.get(item_id)
        if item is None:
            logger.debug(f"Ignoring decoration of unknown item {item_id!r}")
            return False
        item.decoration = Decoration.parse(decoration)
        self._touch()
        return True

    def toggle_decoration(self, item_id: ItemId, decoration: Decoration) -> bool:
        """Apply a decoration, or clear it if it is already the applied one."""
        item = self._items.get(item_id)
        if item is None:
            return False
        decoration = Decoration.parse(decoration)
        if item.decoration == decoration:
            decoration = Decoration.NONE
        return self.set_decoration(item_id, decoration)

    def update_payload(self, item_id: ItemId, **fields: Any) -> bool:
        """Merge content fields (note text, photo images...) into an item's payload."""
        item = self._items.get(item_id)
        if item is None:
            logger.debug(f"Ignoring payload edit of unknown item {item_id!r}")
            return False
        item.payload.update(fields)
        if item.is_placed:
            # A photo strip grows with its images; keep it inside the board.
            item.x, item.y = self.bounds.clamp(item.x, item.y, item.footprint.width)
        self._touch()
        return True

    def set_bounds(self, bounds: BoardBounds):
        """Replace the bounds applied to subsequent writes."""
        if bounds != self.bounds:
            self.bounds = bounds
            self._touch()

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def link(self, a: ItemId, b: ItemId) -> bool:
        """Mark two existing, distinct items as related (both directions)."""
        if a == b or a not in self._items or b not in self._items:
            logger.debug(f"Ignoring link {a!r} <-> {b!r}")
            return False
        self._relations.setdefault(a, set()).add(b)
        self._relations.setdefault(b, set()).add(a)
        self._touch()
        return True

    def unlink(self, a: ItemId, b: ItemId) -> bool:
        """Remove a relation link. Returns False if there was none."""
        if b not in self._relations.get(a, set()):
            return False
        self._relations[a].discard(b)
        self._relations.get(b, set()).discard(a)
        self._touch()
        return True

    def related(self, item_id: ItemId) -> FrozenSet[ItemId]:
        """Ids linked to an item (empty for unknown ids)."""
        return frozenset(self._relations.get(item_id, ()))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add(self, item: Item):
        if item.recency is None:
            item.recency = self._insertions
        self._insertions += 1
        self._items[item.id] = item
        self._touch()

    def _touch(self):
        self.revision += 1

    def _creation_rotation(self) -> float:
        if self._rotation_source is not None:
            return self._rotation_source()
        return ambient_rotation(self.max_rotation)

    @staticmethod
    def _snapshot(item: Item) -> Item:
        return replace(item, payload=deepcopy(item.payload))

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        return {
            "items": len(self._items),
            "placed": sum(1 for item in self._items.values() if item.is_placed),
            "links": sum(len(v) for v in self._relations.values()) // 2,
            "next_id": self._next_id,
            "revision": self.revision,
        }
