"""
StickerWall - Freeform Wall Layout Engine

Deterministic auto-layout, clamped drag interaction, visibility culling and
recency-based z-order for a scrollable wall of decorative items (badges,
sticky notes, photo strips, map pins, ID cards).
"""

__version__ = "0.1.0"

from .config import WallConfig, load_config
from .board.abstraction import BoardBounds, Decoration, Item, ItemKind
from .board.store import ItemStore
from .placement.layout import LayoutEngine, ResolvedPlacement
from .api.session import WallSession

__all__ = [
    "WallConfig",
    "load_config",
    "BoardBounds",
    "Decoration",
    "Item",
    "ItemKind",
    "ItemStore",
    "LayoutEngine",
    "ResolvedPlacement",
    "WallSession",
]
