"""Spatial hash index over item boxes.

Grid-based bucketing gives O(~1) candidate lookup for a query window, which
keeps visibility culling cheap on walls with hundreds of items. Candidates
still go through an exact box test; the index only narrows the search.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple
import math

from ..board.abstraction import ItemId


@dataclass(frozen=True)
class ItemBox:
    """Axis-aligned box occupied by an item."""
    item_id: ItemId
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def intersects(self, min_x: float, min_y: float, max_x: float, max_y: float) -> bool:
        """Check if this box touches a rectangle (edges inclusive)."""
        return not (self.max_x < min_x or self.min_x > max_x or
                    self.max_y < min_y or self.min_y > max_y)


@dataclass
class SpatialHashIndex:
    """Grid hash of item boxes.

    Cell size selection matters:
    - Too small: boxes span many cells, more memory
    - Too large: many boxes per cell, slower queries
    - Rule of thumb: 2-3x the typical item size
    """
    cell_size: float = 500.0
    cells: Dict[Tuple[int, int], List[ItemBox]] = field(default_factory=dict)
    boxes: Dict[ItemId, ItemBox] = field(default_factory=dict)

    def _get_cells_for_rect(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> Set[Tuple[int, int]]:
        """Get all cells that a rectangle overlaps."""
        cells = set()
        start_x = int(math.floor(min_x / self.cell_size))
        end_x = int(math.floor(max_x / self.cell_size))
        start_y = int(math.floor(min_y / self.cell_size))
        end_y = int(math.floor(max_y / self.cell_size))

        for cx in range(start_x, end_x + 1):
            for cy in range(start_y, end_y + 1):
                cells.add((cx, cy))
        return cells

    def __len__(self) -> int:
        return len(self.boxes)

    def add(self, box: ItemBox):
        """Add a box, replacing any previous box for the same item."""
        if box.item_id in self.boxes:
            self.remove(box.item_id)
        for cell in self._get_cells_for_rect(box.min_x, box.min_y, box.max_x, box.max_y):
            self.cells.setdefault(cell, []).append(box)
        self.boxes[box.item_id] = box

    def remove(self, item_id: ItemId) -> bool:
        """Remove an item's box. Returns False if it was not indexed."""
        box = self.boxes.pop(item_id, None)
        if box is None:
            return False
        for cell in self._get_cells_for_rect(box.min_x, box.min_y, box.max_x, box.max_y):
            bucket = self.cells.get(cell)
            if bucket and box in bucket:
                bucket.remove(box)
                if not bucket:
                    del self.cells[cell]
        return True

    def query_rect(self, min_x: float, min_y: float, max_x: float, max_y: float) -> List[ItemBox]:
        """Boxes intersecting a rectangle, each reported once."""
        found = []
        seen = set()
        for cell in self._get_cells_for_rect(min_x, min_y, max_x, max_y):
            for box in self.cells.get(cell, ()):
                if box.item_id in seen:
                    continue
                seen.add(box.item_id)
                if box.intersects(min_x, min_y, max_x, max_y):
                    found.append(box)
        return found

    def get_stats(self) -> Dict:
        """Get index statistics for debugging."""
        cell_counts = [len(boxes) for boxes in self.cells.values()]
        return {
            "total_boxes": len(self.boxes),
            "total_cells": len(self.cells),
            "cell_size": self.cell_size,
            "avg_boxes_per_cell": sum(cell_counts) / max(len(cell_counts), 1),
            "max_boxes_per_cell": max(cell_counts) if cell_counts else 0,
        }


def auto_calibrate_cell_size(
    sizes: Iterable[Tuple[float, float]],
    default: float = 500.0
) -> float:
    """
    Cell size of 2.5x the median item dimension, bounded to [100, 2000] px.

    Args:
        sizes: (width, height) of the items to index
        default: Cell size when there are no items
    """
    max_dims = sorted(max(w, h) for w, h in sizes)
    if not max_dims:
        return default

    median_size = max_dims[len(max_dims) // 2]
    cell_size = median_size * 2.5
    return max(100.0, min(2000.0, cell_size))
