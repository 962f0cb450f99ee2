"""Item records, board bounds and the authoritative item store."""

from .abstraction import (
    BoardBounds,
    Decoration,
    Footprint,
    Item,
    ItemId,
    ItemKind,
    footprint_for,
    photo_strip_footprint,
)
from .store import ItemStore
from .wall_file import (
    ItemRecord,
    WallFile,
    parse_wall_file,
    write_wall_file,
    build_store,
    create_wall_from_store,
)

__all__ = [
    # Core records
    "BoardBounds",
    "Decoration",
    "Footprint",
    "Item",
    "ItemId",
    "ItemKind",
    "footprint_for",
    "photo_strip_footprint",
    # Store
    "ItemStore",
    # Wall file persistence
    "ItemRecord",
    "WallFile",
    "parse_wall_file",
    "write_wall_file",
    "build_store",
    "create_wall_from_store",
]
