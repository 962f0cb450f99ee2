"""
Wall File Handler

Reads and writes a YAML description of a wall so a board can be laid out,
culled or rendered outside a live session.

File Format (YAML):
```yaml
version: 1
board_width: 800
seed: 12345
items:
  - id: 1001
    kind: badge
    x: 125.5
    y: 80.0
    rotation: -1.2
    decoration: pin
    recency: 0
    related: [1002]
    payload:
      label: Rooftop
  - id: 1002
    kind: stickyNote
    payload:
      text: bring snacks
```

Items without ``x``/``y`` are left for the layout engine. ``related`` links
are symmetric; listing a link on either side is enough.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml

from .abstraction import BoardBounds, Decoration, Item, ItemId, ItemKind
from .store import ItemStore

logger = logging.getLogger(__name__)

WALL_FILE_VERSION = 1


def _number(data: Dict[str, Any], key: str, convert, context: str) -> Any:
    """Read an optional numeric field, rejecting anything that is not a number."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{context}: '{key}' must be a number, got {value!r}")
    return convert(value)


@dataclass
class ItemRecord:
    """Serialized form of one item."""
    id: ItemId
    kind: ItemKind
    x: Optional[float] = None
    y: Optional[float] = None
    rotation: Optional[float] = None
    decoration: Decoration = Decoration.NONE
    recency: Optional[int] = None
    related: List[ItemId] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: Dict[str, Any] = {"id": self.id, "kind": self.kind.value}
        if self.x is not None and self.y is not None:
            d["x"] = round(self.x, 4)
            d["y"] = round(self.y, 4)
        if self.rotation is not None:
            d["rotation"] = round(self.rotation, 4)
        if self.decoration != Decoration.NONE:
            d["decoration"] = self.decoration.value
        if self.recency is not None:
            d["recency"] = self.recency
        if self.related:
            d["related"] = list(self.related)
        if self.payload:
            d["payload"] = dict(self.payload)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemRecord":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Item record must be a mapping: {data!r}")
        if "id" not in data or "kind" not in data:
            raise ValueError(f"Item record needs 'id' and 'kind': {data!r}")

        item_id = data["id"]
        if isinstance(item_id, bool) or not isinstance(item_id, (int, str)):
            raise ValueError(f"Item id must be an integer or string, got {item_id!r}")
        context = f"Item {item_id!r}"

        related = data.get("related")
        if related is None:
            related = []
        elif not isinstance(related, list):
            raise ValueError(f"{context}: 'related' must be a list, got {related!r}")
        for other in related:
            if isinstance(other, bool) or not isinstance(other, (int, str)):
                raise ValueError(f"{context}: related id must be an integer or string, got {other!r}")

        payload = data.get("payload")
        if payload is None:
            payload = {}
        elif not isinstance(payload, dict):
            raise ValueError(f"{context}: 'payload' must be a mapping, got {payload!r}")

        return cls(
            id=item_id,
            kind=ItemKind.parse(data["kind"]),
            x=_number(data, "x", float, context),
            y=_number(data, "y", float, context),
            rotation=_number(data, "rotation", float, context),
            decoration=Decoration.parse(data.get("decoration")),
            recency=_number(data, "recency", int, context),
            related=list(related),
            payload=dict(payload),
        )

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            kind=self.kind,
            x=self.x,
            y=self.y,
            rotation=self.rotation,
            decoration=self.decoration,
            recency=self.recency,
            payload=dict(self.payload),
        )


@dataclass
class WallFile:
    """In-memory form of a wall file."""
    version: int = WALL_FILE_VERSION
    board_width: Optional[float] = None
    seed: Optional[int] = None
    items: List[ItemRecord] = field(default_factory=list)
    source_file: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: Dict[str, Any] = {"version": self.version}
        if self.board_width is not None:
            d["board_width"] = self.board_width
        if self.seed is not None:
            d["seed"] = self.seed
        d["items"] = [record.to_dict() for record in self.items]
        return d

    @classmethod
    def from_dict(cls, data: Any) -> "WallFile":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ValueError("Wall file must contain a mapping")
        items = data.get("items")
        if not isinstance(items, list):
            raise ValueError("Wall file must contain an 'items' list")

        version = _number(data, "version", int, "Wall file")
        return cls(
            version=version if version is not None else WALL_FILE_VERSION,
            board_width=_number(data, "board_width", float, "Wall file"),
            seed=_number(data, "seed", int, "Wall file"),
            items=[ItemRecord.from_dict(entry) for entry in items],
        )

    def __repr__(self) -> str:
        placed = sum(1 for r in self.items if r.x is not None and r.y is not None)
        return f"WallFile(items={len(self.items)}, placed={placed})"


def parse_wall_file(path: Union[str, Path]) -> WallFile:
    """
    Parse a wall file.

    Args:
        path: Path to the YAML file

    Returns:
        WallFile instance
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Wall file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in wall file {path}: {e}") from e
    wall = WallFile.from_dict(data)
    wall.source_file = path
    logger.debug(f"Loaded wall file: {wall}")
    return wall


def write_wall_file(wall: WallFile, path: Union[str, Path]) -> Path:
    """
    Write a wall file.

    Args:
        wall: Wall data to write
        path: Path to write to

    Returns:
        The path written
    """
    path = Path(path)
    content = yaml.dump(
        wall.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    path.write_text(content)
    wall.source_file = path
    logger.info(f"Saved wall file: {path} ({len(wall.items)} items)")
    return path


def build_store(wall: WallFile, default_width: float = 800.0, margin: float = 50.0,
                max_rotation: float = 4.0) -> ItemStore:
    """
    Create an ItemStore holding the items of a wall file.

    Links to ids missing from the file are dropped.
    """
    store = ItemStore(
        bounds=BoardBounds.from_width(wall.board_width, default_width, margin),
        max_rotation=max_rotation,
    )
    for record in wall.items:
        store.insert(record.to_item())
    for record in wall.items:
        for other in record.related:
            store.link(record.id, other)
    return store


def create_wall_from_store(store: ItemStore, seed: Optional[int] = None) -> WallFile:
    """Snapshot a store into a WallFile."""
    records = []
    for item in store.list():
        records.append(ItemRecord(
            id=item.id,
            kind=item.kind,
            x=item.x,
            y=item.y,
            rotation=item.rotation,
            decoration=item.decoration,
            recency=item.recency,
            related=sorted(store.related(item.id), key=str),
            payload=item.payload,
        ))
    return WallFile(board_width=store.bounds.board_width, seed=seed, items=records)
