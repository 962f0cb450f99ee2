"""
Tests for wall file reading and writing.
"""

import pytest

from stickerwall.board.abstraction import Decoration, ItemKind
from stickerwall.board.wall_file import (
    ItemRecord,
    WallFile,
    build_store,
    create_wall_from_store,
    parse_wall_file,
    write_wall_file,
)


class TestParse:
    """Test loading wall files."""

    def test_parse(self, wall_yaml):
        wall = parse_wall_file(wall_yaml)
        assert wall.board_width == 800.0
        assert wall.seed == 12345
        assert [r.id for r in wall.items] == [1, 2, 3, 4]
        assert wall.items[0].decoration == Decoration.PIN
        assert wall.items[2].kind == ItemKind.STICKY_NOTE
        assert wall.items[3].x is None
        assert wall.source_file == wall_yaml

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_wall_file(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            parse_wall_file(path)

    def test_missing_items(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("version: 1\n")
        with pytest.raises(ValueError, match="items"):
            parse_wall_file(path)

    def test_record_needs_id_and_kind(self):
        with pytest.raises(ValueError, match="'id' and 'kind'"):
            ItemRecord.from_dict({"kind": "badge"})

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown item kind"):
            WallFile.from_dict({"items": [{"id": 1, "kind": "poster"}]})

    def test_item_not_a_mapping(self):
        """A bare scalar in the items list should be rejected."""
        with pytest.raises(ValueError, match="must be a mapping"):
            WallFile.from_dict({"items": [5]})

    def test_related_not_a_list(self):
        with pytest.raises(ValueError, match="'related' must be a list"):
            WallFile.from_dict({"items": [{"id": 1, "kind": "badge", "related": 7}]})

    @pytest.mark.parametrize("entry", [
        {"id": 1, "kind": "badge", "x": "left", "y": 10},
        {"id": 1, "kind": "badge", "recency": [1]},
        {"id": 1, "kind": "badge", "payload": "text"},
        {"id": [1], "kind": "badge"},
        {"id": 1, "kind": "badge", "related": [{"id": 2}]},
    ])
    def test_malformed_fields(self, entry):
        """Fields of the wrong type should raise ValueError."""
        with pytest.raises(ValueError):
            WallFile.from_dict({"items": [entry]})

    def test_wall_level_numbers(self):
        with pytest.raises(ValueError, match="board_width"):
            WallFile.from_dict({"board_width": "wide", "items": []})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("items: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            parse_wall_file(path)


class TestBuildStore:
    """Test turning a wall file into a store."""

    def test_items_and_links(self, wall_yaml):
        store = build_store(parse_wall_file(wall_yaml))
        assert store.ids() == [1, 2, 3, 4]
        assert store.related(1) == frozenset({2})
        assert store.related(2) == frozenset({1})
        assert not store.get(4).is_placed

    def test_links_to_missing_items_dropped(self):
        wall = WallFile.from_dict({"items": [{"id": "a", "kind": "badge", "related": ["zz"]}]})
        store = build_store(wall)
        assert store.related("a") == frozenset()

    def test_positions_clamped(self):
        wall = WallFile.from_dict({
            "board_width": 600,
            "items": [{"id": 1, "kind": "badge", "x": 900, "y": -4}],
        })
        item = build_store(wall).get(1)
        assert (item.x, item.y) == (325.0, 0.0)

    def test_new_ids_continue_after_file(self, wall_yaml):
        store = build_store(parse_wall_file(wall_yaml))
        assert store.create(ItemKind.BADGE) == 1000


class TestWrite:
    """Test saving wall files."""

    def test_write_and_reload(self, populated_store, tmp_path):
        populated_store.link(1000, 1002)
        path = write_wall_file(create_wall_from_store(populated_store, seed=9),
                               tmp_path / "out.yaml")

        wall = parse_wall_file(path)
        assert wall.seed == 9
        store = build_store(wall)
        assert store.ids() == populated_store.ids()
        assert store.related(1002) == frozenset({1000})
        assert store.get(1001).decoration == Decoration.TAPE
        assert store.get(1002).payload == {"images": ["a.png", "b.png"]}

    def test_unplaced_items_stay_unplaced(self, store, tmp_path):
        store.create(ItemKind.STICKY_NOTE)
        path = write_wall_file(create_wall_from_store(store), tmp_path / "out.yaml")
        assert "x:" not in path.read_text()
        assert not build_store(parse_wall_file(path)).list()[0].is_placed

    def test_record_dict_omits_defaults(self):
        record = ItemRecord(id=5, kind=ItemKind.MAP_PIN)
        assert record.to_dict() == {"id": 5, "kind": "mapPin"}
