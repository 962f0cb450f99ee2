"""
Z-Order and Relation Highlighting

Draw order comes from the recency rank: the lower an item's recency, the
later it is painted and the higher its z-index. Hovered or selected items
jump into a reserved interaction band above every recency-derived index.

Relation highlighting is recomputed from the store's relation links on
every focus change; nothing about it is cached on the items.
"""

from dataclasses import dataclass
from typing import Callable, Collection, Iterable, List, Optional, Sequence, FrozenSet

from ..board.abstraction import ItemId
from ..placement.layout import ResolvedPlacement


@dataclass
class DrawEntry:
    """A placement with its resolved z-index."""
    placement: ResolvedPlacement
    z_index: int
    interacting: bool = False


@dataclass(frozen=True)
class Highlight:
    """Focus state derived for one render pass."""
    focused: Optional[ItemId] = None
    related: FrozenSet[ItemId] = frozenset()
    dimmed: FrozenSet[ItemId] = frozenset()

    def is_related(self, item_id: ItemId) -> bool:
        return item_id in self.related

    def is_dimmed(self, item_id: ItemId) -> bool:
        return item_id in self.dimmed


class ZOrderResolver:
    """Resolves paint order and z-indices from recency and interaction state."""

    def __init__(self, interaction_z: int = 1000):
        self.interaction_z = interaction_z

    def interaction_band(self, count: int) -> int:
        """Z-index reserved for interacting items; always above every recency band."""
        return max(self.interaction_z, count + 1)

    def draw_order(
        self,
        placements: Sequence[ResolvedPlacement],
        interacting: Collection[ItemId] = (),
    ) -> List[DrawEntry]:
        """
        Order placements for painting, bottom first.

        Args:
            placements: Placements to order
            interacting: Ids currently hovered or selected

        Returns:
            DrawEntry list sorted by ascending z-index
        """
        # Ties on recency keep insertion order
        ranked = sorted(placements, key=lambda p: (p.recency, p.original_index))
        count = len(ranked)
        band = self.interaction_band(count)

        entries = []
        for rank, placement in enumerate(ranked):
            hot = placement.id in interacting
            entries.append(DrawEntry(
                placement=placement,
                z_index=band if hot else count - rank,
                interacting=hot,
            ))

        entries.sort(key=lambda e: e.z_index)
        return entries


def highlight(
    item_ids: Iterable[ItemId],
    focused: Optional[ItemId],
    relations: Callable[[ItemId], Iterable[ItemId]],
) -> Highlight:
    """
    Related/dimmed sets for a focused item.

    Args:
        item_ids: Ids of all items on the wall
        focused: Focused item, or None for no highlighting
        relations: Lookup of the ids linked to an item

    Returns:
        Highlight where every item other than the focused one and its
        related items is dimmed
    """
    ids = frozenset(item_ids)
    if focused is None or focused not in ids:
        return Highlight()

    related = frozenset(relations(focused)) & ids
    dimmed = ids - related - {focused}
    return Highlight(focused=focused, related=related, dimmed=dimmed)
