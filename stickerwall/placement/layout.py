"""
Layout Engine

Derives display positions for items that carry no stored coordinates.

Un-positioned items form vertically separated rows in insertion order. Each
row gets a clustered-but-organic horizontal position (one wide draw plus two
smaller perturbations around the board centre) and a small vertical jitter,
all taken from a seeded stream so a re-layout reproduces the same wall.
Items with stored coordinates pass through untouched.

The engine never writes back into the item store.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..board.abstraction import BoardBounds, Footprint, Item, ItemId, ItemKind
from ..config import WallConfig
from .sequence import SeededSequence, derived_rotation

logger = logging.getLogger(__name__)


@dataclass
class ResolvedPlacement:
    """Display transform for one item."""
    id: ItemId
    kind: ItemKind
    x: float
    y: float
    rotation: float
    recency: int
    width: float
    height: float
    derived: bool = False  # True if computed by the engine rather than stored
    original_index: int = 0

    def get_bounding_box(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the unrotated body."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class LayoutEngine:
    """
    Seeded placement of un-positioned items.

    The engine owns one long-lived SeededSequence and restarts it at the
    beginning of every pass, so the output is a pure function of the seed,
    the item list and the board width.
    """

    def __init__(self, config: Optional[WallConfig] = None, seed: Optional[int] = None):
        self.config = config or WallConfig()
        self._sequence = SeededSequence(self.config.seed if seed is None else seed)

    @property
    def seed(self) -> int:
        return self._sequence.seed

    def reseed(self, seed: int):
        """Switch to a new seed for subsequent passes."""
        self._sequence.reseed(seed)

    def bounds_for(self, board_width: Optional[float]) -> BoardBounds:
        """Board bounds, falling back to the default width when none is known."""
        if not board_width or board_width <= 0:
            logger.debug(f"Board width {board_width!r} unusable, "
                         f"falling back to {self.config.default_board_width}")
        return BoardBounds.from_width(
            board_width,
            default_width=self.config.default_board_width,
            margin=self.config.bound_margin,
        )

    def resolve(self, items: Sequence[Item],
                board_width: Optional[float] = None) -> List[ResolvedPlacement]:
        """
        Resolve a display transform for every item.

        Items without a stored rotation, placed or not, get
        ``derived_rotation(seed, id)``: a stable per-item value rather than
        an ambient random draw, so repeated passes show the same tilt.

        Args:
            items: Items in insertion order
            board_width: Reported board width (px); falls back to the default

        Returns:
            One ResolvedPlacement per item, in input order
        """
        cfg = self.config
        bounds = self.bounds_for(board_width)
        width = bounds.board_width
        center_x = width / 2
        horizontal_range = width * cfg.horizontal_range_fraction

        self._sequence.reseed()
        placements: List[ResolvedPlacement] = []
        row = 0

        for index, item in enumerate(items):
            fp = item.footprint
            recency = item.recency if item.recency is not None else index
            rotation = item.rotation
            if rotation is None:
                rotation = derived_rotation(self.seed, item.id, cfg.max_rotation)

            if item.is_placed:
                placements.append(ResolvedPlacement(
                    id=item.id,
                    kind=item.kind,
                    x=item.x,
                    y=item.y,
                    rotation=rotation,
                    recency=recency,
                    width=fp.width,
                    height=fp.height,
                    derived=False,
                    original_index=index,
                ))
                continue

            base_y = cfg.base_offset + row * cfg.vertical_spacing
            row += 1

            # Three draws: a wide spread plus two narrower perturbations
            r1 = self._sequence.next()
            r2 = self._sequence.next()
            r3 = self._sequence.next()
            offset = ((r1 - 0.5) * horizontal_range
                      + (r2 - 0.5) * cfg.primary_perturbation
                      + (r3 - 0.5) * cfg.secondary_perturbation)
            jitter = self._sequence.between(-cfg.vertical_jitter, cfg.vertical_jitter)

            x, y = bounds.clamp(center_x + offset - fp.width / 2, base_y + jitter, fp.width)
            placements.append(ResolvedPlacement(
                id=item.id,
                kind=item.kind,
                x=x,
                y=y,
                rotation=rotation,
                recency=recency,
                width=fp.width,
                height=fp.height,
                derived=True,
                original_index=index,
            ))

        logger.debug(f"Resolved {len(placements)} items ({row} derived) "
                     f"with seed {self.seed} on width {width}")
        return placements


def fallback_position(
    items: Sequence[Item],
    footprint: Footprint,
    board_width: Optional[float] = None,
    config: Optional[WallConfig] = None,
) -> Tuple[float, float]:
    """
    Position for a new item created without usable click coordinates.

    The item goes one fallback spacing below the lowest stored item (or
    below the fallback floor on an empty wall), centred horizontally.

    Returns:
        Clamped (x, y)
    """
    cfg = config or WallConfig()
    bounds = BoardBounds.from_width(board_width, cfg.default_board_width, cfg.bound_margin)

    if items:
        max_y = max((item.y or 0.0) for item in items)
    else:
        max_y = cfg.fallback_floor

    x = bounds.board_width / 2 - footprint.width / 2
    y = max_y + cfg.fallback_spacing
    return bounds.clamp(x, y, footprint.width)


def board_height(item_count: int, config: Optional[WallConfig] = None) -> float:
    """Scrollable height of the wall for a number of items."""
    cfg = config or WallConfig()
    return max(cfg.min_board_height,
               item_count * cfg.board_height_per_item + cfg.board_height_padding)
