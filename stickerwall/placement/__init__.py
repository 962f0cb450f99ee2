"""Seeded sequence generation and the auto-layout engine."""

from .sequence import SeededSequence, ambient_rotation, derived_rotation, keyed_unit
from .layout import LayoutEngine, ResolvedPlacement, board_height, fallback_position

__all__ = [
    "SeededSequence",
    "ambient_rotation",
    "derived_rotation",
    "keyed_unit",
    "LayoutEngine",
    "ResolvedPlacement",
    "board_height",
    "fallback_position",
]
