"""
Wall Session State

Hosts one wall: the item store plus the interaction state around it
(placement mode, edit/view mode, hover, selection, focus, viewport).
Produces the per-frame render plan by chaining layout, culling, z-order
and relation highlighting.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..board.abstraction import BoardBounds, Decoration, ItemId, ItemKind
from ..board.store import ItemStore
from ..config import WallConfig
from ..placement.layout import LayoutEngine, ResolvedPlacement, board_height
from ..view.culling import Viewport, VisibilityCuller
from ..view.spatial_index import ItemBox, SpatialHashIndex, auto_calibrate_cell_size
from ..view.z_order import Highlight, ZOrderResolver, highlight
from .drag import DragController
from .placement_mode import PlacementController, PlacementMode, PlacementResult

logger = logging.getLogger(__name__)


@dataclass
class RenderItem:
    """Everything a presentation layer needs to draw one item."""
    id: ItemId
    kind: ItemKind
    x: float
    y: float
    rotation: float
    width: float
    height: float
    z_index: int
    decoration: Decoration = Decoration.NONE
    hovered: bool = False
    selected: bool = False
    focused: bool = False
    related: bool = False
    dimmed: bool = False
    derived: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "rotation": round(self.rotation, 2),
            "z": self.z_index,
            "decoration": self.decoration.value,
            "hovered": self.hovered,
            "selected": self.selected,
            "focused": self.focused,
            "related": self.related,
            "dimmed": self.dimmed,
        }


class WallSession:
    """
    Manages the lifecycle of a wall editing session.

    Provides:
    - placement-mode item creation
    - drag gestures (disabled in placement mode and view mode)
    - hover/selection/focus tracking
    - the render plan for the current viewport
    """

    def __init__(self, config: Optional[WallConfig] = None, store: Optional[ItemStore] = None):
        self.config = config or WallConfig()
        cfg = self.config

        if store is None:
            store = ItemStore(
                bounds=BoardBounds.from_width(None, cfg.default_board_width, cfg.bound_margin),
                max_rotation=cfg.max_rotation,
            )
        self.store = store
        self.layout = LayoutEngine(cfg)
        self.placement = PlacementController(self.store, cfg)
        self.drag = DragController(self.store, is_enabled=lambda: self.drag_enabled)
        self.culler = VisibilityCuller(
            buffer=cfg.cull_buffer,
            default_height=cfg.default_viewport_height,
            default_width=self.store.bounds.board_width,
        )
        self.z_order = ZOrderResolver(cfg.interaction_z)

        self.viewport = Viewport(height=cfg.default_viewport_height,
                                 width=self.store.bounds.board_width)
        self.edit_mode: bool = True
        self.hovered_id: Optional[ItemId] = None
        self.selected_id: Optional[ItemId] = None
        self.focused_id: Optional[ItemId] = None

        self._index: Optional[SpatialHashIndex] = None
        self._index_key: Optional[Tuple] = None

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @property
    def board_width(self) -> float:
        return self.store.bounds.board_width

    def set_board_width(self, board_width: Optional[float]):
        """Apply a reported board width (falls back to the default when unusable)."""
        bounds = BoardBounds.from_width(board_width, self.config.default_board_width,
                                        self.config.bound_margin)
        self.store.set_bounds(bounds)
        self.culler.default_width = bounds.board_width

    def set_window_width(self, window_width: Optional[float]):
        """Apply a reported window width; the board takes a fixed share of it."""
        self.set_board_width(self.config.board_width_from_window(window_width))

    def set_viewport(self, scroll_offset: float, height: Optional[float] = None,
                     width: Optional[float] = None):
        """Record the current scroll offset and viewport size."""
        self.viewport = Viewport(
            scroll_offset=scroll_offset or 0.0,
            height=height or 0.0,
            width=width if width else self.board_width,
        )

    def set_seed(self, seed: int):
        """Reseed the layout engine for subsequent render passes."""
        self.layout.reseed(seed)

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    @property
    def drag_enabled(self) -> bool:
        return self.edit_mode and not self.placement.is_active

    def set_edit_mode(self, enabled: bool):
        """Switch between edit mode and view mode."""
        self.edit_mode = enabled
        if not enabled:
            self.drag.cancel_all()

    def arm_placement(self, mode: PlacementMode):
        """Enter a placement mode; active drags stop."""
        self.placement.arm(mode)
        if self.placement.is_active:
            self.drag.cancel_all()

    def place(self, x: Optional[float], y: Optional[float],
              payload: Optional[Dict[str, Any]] = None,
              on_item: bool = False) -> PlacementResult:
        """Forward a board click to the placement controller."""
        return self.placement.click(x, y, payload=payload, on_item=on_item)

    # ------------------------------------------------------------------
    # Item interaction
    # ------------------------------------------------------------------

    def remove(self, item_id: ItemId) -> bool:
        """Delete an item and forget any interaction state pointing at it."""
        self.drag.cancel(item_id)
        if self.hovered_id == item_id:
            self.hovered_id = None
        if self.selected_id == item_id:
            self.selected_id = None
        if self.focused_id == item_id:
            self.focused_id = None
        return self.store.remove(item_id)

    def hover(self, item_id: Optional[ItemId]):
        """Set (or clear, with None) the hovered item."""
        self.hovered_id = item_id if item_id is None or item_id in self.store else None

    def select(self, item_id: Optional[ItemId]) -> bool:
        """
        Toggle selection of an item.

        Returns:
            True if the selection changed; clicks on items in placement mode
            and clicks on unknown items are ignored
        """
        if self.placement.is_active:
            return False
        if item_id is not None and item_id not in self.store:
            return False
        self.selected_id = None if item_id is None or self.selected_id == item_id else item_id
        return True

    def focus(self, item_id: Optional[ItemId]) -> bool:
        """Toggle relation highlighting for an item."""
        if item_id is not None and item_id not in self.store:
            return False
        self.focused_id = None if item_id is None or self.focused_id == item_id else item_id
        return True

    def begin_drag(self, item_id: ItemId) -> bool:
        """Start dragging an item from where it is currently displayed."""
        origin = None
        item = self.store.get(item_id)
        if item is not None and not item.is_placed:
            for placement in self.placements():
                if placement.id == item_id:
                    origin = (placement.x, placement.y)
                    break
        return self.drag.begin(item_id, origin=origin)

    def drag_by(self, item_id: ItemId, dx: float, dy: float) -> Optional[Tuple[float, float]]:
        return self.drag.move(item_id, dx, dy)

    def end_drag(self, item_id: ItemId) -> Optional[Tuple[float, float]]:
        return self.drag.end(item_id)

    # ------------------------------------------------------------------
    # Render plan
    # ------------------------------------------------------------------

    def placements(self) -> List[ResolvedPlacement]:
        """Resolved transforms for every item."""
        return self.layout.resolve(self.store.list(), self.board_width)

    def visible_placements(self) -> List[ResolvedPlacement]:
        """Placements inside the buffered viewport."""
        placements = self.placements()
        index = self._spatial_index(placements)
        return self.culler.cull(placements, self.viewport, index=index)

    def highlight(self) -> Highlight:
        return highlight(self.store.ids(), self.focused_id, self.store.related)

    def frame(self) -> List[RenderItem]:
        """
        Build the render plan for the current state.

        Returns:
            RenderItems for visible items, in paint order (bottom first)
        """
        visible = self.visible_placements()
        marks = self.highlight()
        interacting = {i for i in (self.hovered_id, self.selected_id) if i is not None}
        decorations = {item.id: item.decoration for item in self.store.list()}

        frame = []
        for entry in self.z_order.draw_order(visible, interacting):
            p = entry.placement
            frame.append(RenderItem(
                id=p.id,
                kind=p.kind,
                x=p.x,
                y=p.y,
                rotation=p.rotation,
                width=p.width,
                height=p.height,
                z_index=entry.z_index,
                decoration=decorations.get(p.id, Decoration.NONE),
                hovered=p.id == self.hovered_id,
                selected=p.id == self.selected_id,
                focused=p.id == marks.focused,
                related=marks.is_related(p.id),
                dimmed=marks.is_dimmed(p.id),
                derived=p.derived,
            ))
        return frame

    def board_height(self) -> float:
        return board_height(len(self.store), self.config)

    def _spatial_index(self, placements: List[ResolvedPlacement]) -> Optional[SpatialHashIndex]:
        """Cached spatial hash for large walls; None below the threshold."""
        if len(placements) <= self.config.index_threshold:
            return None

        key = (self.store.revision, self.board_width, self.layout.seed)
        if self._index is None or self._index_key != key:
            cell_size = auto_calibrate_cell_size((p.width, p.height) for p in placements)
            index = SpatialHashIndex(cell_size=cell_size)
            for p in placements:
                index.add(ItemBox(p.id, *p.get_bounding_box()))
            self._index = index
            self._index_key = key
            logger.debug(f"Rebuilt spatial index: {index.get_stats()}")
        return self._index

    def get_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        return {
            "items": len(self.store),
            "board_width": self.board_width,
            "board_height": self.board_height(),
            "seed": self.layout.seed,
            "edit_mode": self.edit_mode,
            "placement_mode": self.placement.mode.value,
            "dragging": self.drag.active_items,
            "hovered": self.hovered_id,
            "selected": self.selected_id,
            "focused": self.focused_id,
        }
