"""Tests for tridecco/hex_grid.py - offset-coordinate hex grid."""

import pytest

from tridecco.errors import InvalidConfigurationError
from tridecco.hex_grid import Cell, HexGrid
from tridecco.models import GridType


def _filled(grid_type, columns=4, rows=3) -> HexGrid:
    grid = HexGrid(columns, rows, grid_type)
    for row in range(rows):
        for col in range(columns):
            grid.set(col, row, f"{col},{row}")
    return grid


def _coords(cells):
    return [(cell.col, cell.row) for cell in cells]


class TestConstruction:
    """Test HexGrid construction."""

    def test_accepts_string_type(self) -> None:
        """Grid type strings should be coerced to GridType."""
        grid = HexGrid(3, 2, "even-q")
        assert grid.type is GridType.EVEN_Q
        assert grid.columns == 3
        assert grid.rows == 2

    def test_starts_empty(self) -> None:
        """Every cell should start as None."""
        grid = HexGrid(3, 2)
        assert all(cell.value is None for cell in grid)

    def test_rejects_unknown_type(self) -> None:
        """Unknown layouts should raise InvalidConfigurationError."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            HexGrid(3, 3, "diagonal")
        assert exc_info.value.context["type"] == "diagonal"

    def test_rejects_non_positive_dimensions(self) -> None:
        """Zero or negative dimensions should be rejected."""
        with pytest.raises(InvalidConfigurationError):
            HexGrid(0, 3)


class TestCellAccess:
    """Test bounds-checked get/set/remove."""

    def test_set_then_get(self) -> None:
        grid = HexGrid(3, 3)
        grid.set(2, 1, "x")
        assert grid.get(2, 1) == "x"
        assert grid.cells[1][2] == "x"

    def test_out_of_range_get_returns_none(self) -> None:
        """Out-of-range reads should never raise."""
        grid = HexGrid(3, 3)
        assert grid.get(-1, 0) is None
        assert grid.get(3, 0) is None
        assert grid.get(0, 99) is None

    def test_out_of_range_set_is_ignored(self) -> None:
        grid = HexGrid(2, 2)
        grid.set(5, 5, "x")
        assert all(cell.value is None for cell in grid)

    def test_remove_returns_previous(self) -> None:
        grid = HexGrid(2, 2)
        grid.set(1, 1, "x")
        assert grid.remove(1, 1) == "x"
        assert grid.get(1, 1) is None
        assert grid.remove(1, 1) is None

    def test_remove_out_of_range(self) -> None:
        assert HexGrid(2, 2).remove(7, 7) is None


class TestAdjacency:
    """Test neighbor lookup for every offset layout."""

    def test_odd_r_odd_row(self) -> None:
        grid = _filled(GridType.ODD_R)
        assert _coords(grid.get_adjacents(1, 1)) == [
            (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 1),
        ]

    def test_odd_r_corner_is_clipped(self) -> None:
        """Neighbors outside the grid should be dropped."""
        grid = _filled(GridType.ODD_R)
        assert _coords(grid.get_adjacents(0, 0)) == [(1, 0), (0, 1)]

    def test_odd_r_even_row(self) -> None:
        grid = _filled(GridType.ODD_R, 5, 5)
        assert _coords(grid.get_adjacents(2, 2)) == [
            (1, 1), (2, 1), (3, 2), (2, 3), (1, 3), (1, 2),
        ]

    def test_even_r_even_row(self) -> None:
        grid = _filled(GridType.EVEN_R, 5, 5)
        assert _coords(grid.get_adjacents(2, 2)) == [
            (2, 1), (3, 1), (3, 2), (3, 3), (2, 3), (1, 2),
        ]

    def test_odd_q_odd_column(self) -> None:
        grid = _filled(GridType.ODD_Q, 5, 5)
        assert _coords(grid.get_adjacents(3, 2)) == [
            (3, 1), (4, 2), (4, 3), (3, 3), (2, 3), (2, 2),
        ]

    def test_even_q_even_column(self) -> None:
        grid = _filled(GridType.EVEN_Q, 5, 5)
        assert _coords(grid.get_adjacents(2, 2)) == [
            (2, 1), (3, 2), (3, 3), (2, 3), (1, 3), (1, 2),
        ]

    def test_even_r_odd_row(self) -> None:
        grid = _filled(GridType.EVEN_R)
        assert _coords(grid.get_adjacents(1, 1)) == [
            (0, 0), (1, 0), (2, 1), (1, 2), (0, 2), (0, 1),
        ]

    def test_odd_q_even_column(self) -> None:
        grid = _filled(GridType.ODD_Q)
        assert _coords(grid.get_adjacents(2, 1)) == [
            (2, 0), (3, 0), (3, 1), (2, 2), (1, 1), (1, 0),
        ]

    def test_even_q_odd_column(self) -> None:
        grid = _filled(GridType.EVEN_Q)
        assert _coords(grid.get_adjacents(1, 1)) == [
            (1, 0), (2, 0), (2, 1), (1, 2), (0, 1), (0, 0),
        ]

    def test_only_occupied_neighbors(self) -> None:
        """Empty neighbors should not be reported."""
        grid = HexGrid(4, 3, GridType.ODD_R)
        grid.set(2, 1, "a")
        grid.set(3, 2, "b")
        assert grid.get_adjacents(1, 1) == [Cell(2, 1, "a")]

    def test_neighbor_coordinates_ignore_occupancy(self) -> None:
        grid = HexGrid(4, 3, GridType.ODD_R)
        assert len(grid.neighbor_coordinates(1, 1)) == 6
        assert grid.get_adjacents(1, 1) == []


class TestIterationAndCopy:
    """Test iteration, clear, clone and serialization."""

    def test_iteration_is_row_major(self) -> None:
        grid = HexGrid(2, 2)
        assert _coords(grid) == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_for_each_passes_value_col_row(self) -> None:
        grid = HexGrid(2, 1)
        grid.set(1, 0, "v")
        seen = []
        grid.for_each(lambda value, col, row: seen.append((value, col, row)))
        assert seen == [(None, 0, 0), ("v", 1, 0)]

    def test_clear(self) -> None:
        grid = _filled(GridType.ODD_R)
        grid.clear()
        assert all(cell.value is None for cell in grid)

    def test_clone_is_deep(self) -> None:
        """Mutating a cloned cell should not affect the original."""
        grid = HexGrid(2, 2, "odd-q")
        grid.set(0, 0, {"k": 1})
        cloned = grid.clone()
        cloned.get(0, 0)["k"] = 2
        assert grid.get(0, 0) == {"k": 1}
        assert cloned.type is GridType.ODD_Q
        assert (cloned.columns, cloned.rows) == (2, 2)

    def test_dict_round_trip(self) -> None:
        grid = HexGrid(3, 2, "even-r")
        grid.set(2, 1, "z")
        restored = HexGrid.from_dict(grid.to_dict())
        assert restored.type is GridType.EVEN_R
        assert restored.get(2, 1) == "z"
        assert restored.cells == grid.cells
