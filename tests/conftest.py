"""
Shared test fixtures for StickerWall tests.

Provides reusable configurations, stores and sessions for testing the
layout engine, drag interaction, culling and z-order.
"""

import pytest
from typing import List

from stickerwall.board.abstraction import BoardBounds, Decoration, Item, ItemKind
from stickerwall.board.store import ItemStore
from stickerwall.config import WallConfig


@pytest.fixture
def config() -> WallConfig:
    """Stock configuration."""
    return WallConfig()


@pytest.fixture
def bounds() -> BoardBounds:
    """Bounds of an 800px board with a 50px margin."""
    return BoardBounds(board_width=800.0, margin=50.0)


@pytest.fixture
def store(bounds) -> ItemStore:
    """An empty store whose creation rotation is fixed for reproducibility."""
    return ItemStore(bounds=bounds, rotation_source=lambda: 1.5)


@pytest.fixture
def populated_store(store) -> ItemStore:
    """A store with a badge, a sticky note and a photo strip placed by hand."""
    store.create(ItemKind.BADGE, payload={"label": "Rooftop"}, position=(100.0, 100.0))
    store.create(ItemKind.STICKY_NOTE, payload={"text": "hi"}, position=(300.0, 600.0),
                 decoration=Decoration.TAPE)
    store.create(ItemKind.PHOTO_STRIP, payload={"images": ["a.png", "b.png"]},
                 position=(200.0, 1400.0))
    return store


@pytest.fixture
def unplaced_items() -> List[Item]:
    """Five badges without stored coordinates."""
    return [Item(id=i, kind=ItemKind.BADGE) for i in range(1, 6)]


@pytest.fixture
def session(config, store):
    """A session wrapping the fixed-rotation store."""
    from stickerwall.api.session import WallSession

    return WallSession(config, store=store)


@pytest.fixture
def empty_session():
    """A session with default everything."""
    from stickerwall.api.session import WallSession

    return WallSession()


@pytest.fixture
def wall_yaml(tmp_path):
    """A wall file with two linked badges, one note and one unplaced badge."""
    path = tmp_path / "wall.yaml"
    path.write_text(
        "version: 1\n"
        "board_width: 800\n"
        "seed: 12345\n"
        "items:\n"
        "  - id: 1\n"
        "    kind: badge\n"
        "    x: 100\n"
        "    y: 100\n"
        "    rotation: 2.0\n"
        "    decoration: pin\n"
        "    related: [2]\n"
        "  - id: 2\n"
        "    kind: badge\n"
        "    x: 400\n"
        "    y: 300\n"
        "    rotation: -1.0\n"
        "  - id: 3\n"
        "    kind: stickyNote\n"
        "    x: 200\n"
        "    y: 5000\n"
        "    rotation: 0.5\n"
        "    payload:\n"
        "      text: far away\n"
        "  - id: 4\n"
        "    kind: badge\n"
    )
    return path
