"""Render-side decisions: visibility culling, spatial hashing and z-order."""

from .culling import Viewport, VirtualWindow, VisibilityCuller, virtual_window
from .spatial_index import ItemBox, SpatialHashIndex, auto_calibrate_cell_size
from .z_order import DrawEntry, Highlight, ZOrderResolver, highlight

__all__ = [
    "Viewport",
    "VirtualWindow",
    "VisibilityCuller",
    "virtual_window",
    "ItemBox",
    "SpatialHashIndex",
    "auto_calibrate_cell_size",
    "DrawEntry",
    "Highlight",
    "ZOrderResolver",
    "highlight",
]
