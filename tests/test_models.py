"""Tests for tridecco/models.py and tridecco/maps - position map loading."""

import json

import pytest

from tridecco.errors import InvalidConfigurationError
from tridecco.maps import BUNDLED_MAP_PATH, get_default_map, load_position_map
from tridecco.models import GridType, HexagonInfo, PositionMap, PositionRecord


def _record(**overrides):
    data = {
        "adjacents": [],
        "isEdge": True,
        "A": [0, 0, 1], "B": [0, 0, 2], "C": [0, 0, 3], "D": [0, 0, 4],
        "E": [0, 0, 5], "F": [0, 0, 6], "G": [1, 0, 1], "H": [1, 0, 2],
    }
    data.update(overrides)
    return data


def _map(**overrides):
    data = {"type": "odd-r", "columns": 2, "rows": 1, "positions": [_record()]}
    data.update(overrides)
    return data


class TestPositionRecord:
    """Test PositionRecord parsing and helpers."""

    def test_aliases(self) -> None:
        record = PositionRecord.model_validate(_record())
        assert record.is_edge is True
        assert record.a == (0, 0, 1)
        assert record.h == (1, 0, 2)

    def test_cell_groups(self) -> None:
        record = PositionRecord.model_validate(_record())
        assert len(record.first_color_cells()) == 4
        assert record.second_color_cells()[0] == (0, 0, 5)
        assert len(record.cells()) == 8
        assert record.related_cells() == record.cells()[:6]

    def test_is_frozen(self) -> None:
        record = PositionRecord.model_validate(_record())
        with pytest.raises(Exception):
            record.is_edge = False


class TestPositionMap:
    """Test PositionMap validation."""

    def test_valid_map(self) -> None:
        position_map = PositionMap.from_dict(_map())
        assert position_map.type is GridType.ODD_R
        assert len(position_map.positions) == 1

    def test_from_dict_passes_models_through(self) -> None:
        position_map = PositionMap.from_dict(_map())
        assert PositionMap.from_dict(position_map) is position_map

    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "odd-x"},
            {"columns": 0},
            {"rows": -1},
            {"positions": []},
            {"positions": [_record(adjacents=[1])]},
            {"positions": [_record(A=[5, 0, 1])]},
            {"positions": [_record(B=[0, 0, 7])]},
        ],
    )
    def test_invalid_maps(self, overrides) -> None:
        """Each malformed map should raise InvalidConfigurationError."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            PositionMap.from_dict(_map(**overrides))
        assert exc_info.value.context["errors"]

    def test_missing_fields(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            PositionMap.from_dict({"type": "odd-r"})

    def test_to_dict_uses_aliases(self) -> None:
        data = PositionMap.from_dict(_map()).to_dict()
        assert data["type"] == "odd-r"
        assert data["positions"][0]["A"] == [0, 0, 1]
        assert "isEdge" in data["positions"][0]


class TestHexagonInfo:
    """Test HexagonInfo."""

    def test_key_and_equality(self) -> None:
        info = HexagonInfo(coordinate=(2, 1), color="red")
        assert info.key == "2-1"
        assert info == HexagonInfo(coordinate=[2, 1], color="red")


class TestMaps:
    """Test bundled and file-based maps."""

    def test_default_map_shape(self) -> None:
        position_map = get_default_map()
        assert position_map.type is GridType.ODD_R
        assert (position_map.columns, position_map.rows) == (4, 3)
        assert len(position_map.positions) == 9

    def test_default_map_is_cached(self) -> None:
        assert get_default_map() is get_default_map()

    def test_default_map_covers_each_triangle_once(self) -> None:
        """Every triangle of the 4x3 grid belongs to exactly one position."""
        cells = [c for p in get_default_map().positions for c in p.cells()]
        assert len(cells) == len(set(cells)) == 4 * 3 * 6

    def test_default_map_adjacency_is_symmetric(self) -> None:
        positions = get_default_map().positions
        for index, position in enumerate(positions):
            for adjacent in position.adjacents:
                assert index in positions[adjacent].adjacents

    def test_load_position_map(self, tmp_path) -> None:
        path = tmp_path / "map.json"
        path.write_text(json.dumps(_map()))
        assert load_position_map(path).columns == 2

    def test_load_missing_file(self, tmp_path) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            load_position_map(tmp_path / "nope.json")
        assert "nope.json" in exc_info.value.context["path"]

    def test_load_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(InvalidConfigurationError):
            load_position_map(path)

    def test_bundled_file_exists(self) -> None:
        assert BUNDLED_MAP_PATH.is_file()

    def test_map_path_override(self, tmp_path, monkeypatch) -> None:
        """TRIDECCO_MAP_PATH should replace the bundled default."""
        path = tmp_path / "small.json"
        path.write_text(json.dumps(_map()))
        monkeypatch.setattr("tridecco.maps.MAP_PATH", str(path))
        get_default_map.cache_clear()
        try:
            assert get_default_map().columns == 2
        finally:
            monkeypatch.undo()
            get_default_map.cache_clear()
        assert get_default_map().columns == 4
