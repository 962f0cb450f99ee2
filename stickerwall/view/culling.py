"""
Visibility Culling

Decides which items are worth rendering for the current scroll position.
An item is kept when its box touches the viewport window grown by a
generous buffer on every side, so items do not pop in and out during fast
scrolling. Culling only filters; it never touches stored item state.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..placement.layout import ResolvedPlacement
from .spatial_index import SpatialHashIndex

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    """Scroll position and visible size of the wall (px)."""
    scroll_offset: float = 0.0
    height: float = 0.0
    width: float = 0.0


@dataclass
class VirtualWindow:
    """Index range of fixed-height rows to render."""
    start: int
    end: int  # exclusive
    total_height: float
    offset_y: float

    def __len__(self) -> int:
        return self.end - self.start


class VisibilityCuller:
    """Buffered viewport test for resolved placements."""

    def __init__(self, buffer: float = 200.0, default_height: float = 800.0,
                 default_width: float = 800.0):
        """
        Args:
            buffer: Extra distance kept around the viewport on every side
            default_height: Viewport height used when none is reported
            default_width: Viewport width used when none is reported
        """
        self.buffer = buffer
        self.default_height = default_height
        self.default_width = default_width

    def window(self, viewport: Viewport) -> Tuple[float, float, float, float]:
        """
        Buffered window for a viewport.

        Returns:
            (min_x, min_y, max_x, max_y) in board coordinates
        """
        height = viewport.height if viewport.height and viewport.height > 0 else self.default_height
        width = viewport.width if viewport.width and viewport.width > 0 else self.default_width
        top = viewport.scroll_offset or 0.0
        return (-self.buffer,
                top - self.buffer,
                width + self.buffer,
                top + height + self.buffer)

    def is_visible(self, placement: ResolvedPlacement, viewport: Viewport) -> bool:
        """True unless the item lies completely outside the buffered window."""
        min_x, min_y, max_x, max_y = self.window(viewport)
        return not (placement.x + placement.width < min_x or
                    placement.x > max_x or
                    placement.y + placement.height < min_y or
                    placement.y > max_y)

    def cull(
        self,
        placements: Sequence[ResolvedPlacement],
        viewport: Viewport,
        index: Optional[SpatialHashIndex] = None,
    ) -> List[ResolvedPlacement]:
        """
        Keep the placements that should be rendered, in input order.

        Args:
            placements: Resolved placements to filter
            viewport: Current scroll position and size
            index: Optional spatial hash built from the same placements;
                narrows the candidates before the exact test

        Returns:
            The visible subset
        """
        if index is None:
            visible = [p for p in placements if self.is_visible(p, viewport)]
        else:
            candidates = {box.item_id for box in index.query_rect(*self.window(viewport))}
            visible = [p for p in placements
                       if p.id in candidates and self.is_visible(p, viewport)]

        logger.debug(f"Culled {len(placements) - len(visible)} of {len(placements)} items "
                     f"at scroll {viewport.scroll_offset}")
        return visible


def virtual_window(
    count: int,
    scroll_offset: float,
    viewport_height: float,
    item_height: float = 350.0,
    padding: float = 100.0,
) -> VirtualWindow:
    """
    Row range for index-based virtualization of fixed-height rows.

    Args:
        count: Number of rows
        scroll_offset: Current scroll position (px)
        viewport_height: Visible height (px)
        item_height: Height of one row (px)
        padding: Extra distance rendered above and below the viewport

    Returns:
        VirtualWindow with the rows to render and the spacer geometry
    """
    start = max(0, int(math.floor((scroll_offset - padding) / item_height)))
    end = min(count, int(math.ceil((scroll_offset + viewport_height + padding) / item_height)))
    start = min(start, count)
    end = max(end, start)
    return VirtualWindow(
        start=start,
        end=end,
        total_height=count * item_height,
        offset_y=start * item_height,
    )
