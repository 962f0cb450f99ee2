"""
StickerWall Interaction API

Modules:
- drag: Clamped drag gestures against the item store
- placement_mode: Click-to-create while a placement mode is armed
- session: Wall state and per-frame render plan
"""

from .drag import DragController, DragGesture
from .placement_mode import PlacementController, PlacementMode, PlacementResult, board_point
from .session import RenderItem, WallSession

__all__ = [
    "DragController",
    "DragGesture",
    "PlacementController",
    "PlacementMode",
    "PlacementResult",
    "board_point",
    "RenderItem",
    "WallSession",
]
