"""
Hex Grid

A rectangular array of cells addressed by offset coordinates (col, row).
Neighbor lookup follows one of four offset layouts; see GridType.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Tuple

from .errors import InvalidConfigurationError
from .models import GridType

logger = logging.getLogger(__name__)

# (dcol, drow) offsets, indexed [grid type][parity]; parity 0 = even.
# Parity comes from the row for r-layouts and from the column for q-layouts.
DIRECTIONS: Dict[GridType, Tuple[Tuple[Tuple[int, int], ...], ...]] = {
    GridType.ODD_R: (
        ((-1, -1), (0, -1), (1, 0), (0, 1), (-1, 1), (-1, 0)),
        ((0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 0)),
    ),
    GridType.EVEN_R: (
        ((0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 0)),
        ((-1, -1), (0, -1), (1, 0), (0, 1), (-1, 1), (-1, 0)),
    ),
    GridType.ODD_Q: (
        ((0, -1), (1, -1), (1, 0), (0, 1), (-1, 0), (-1, -1)),
        ((0, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)),
    ),
    GridType.EVEN_Q: (
        ((0, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)),
        ((0, -1), (1, -1), (1, 0), (0, 1), (-1, 0), (-1, -1)),
    ),
}


class Cell(NamedTuple):
    col: int
    row: int
    value: Any


def parse_grid_type(grid_type: Any) -> GridType:
    """Coerce a string or GridType, raising InvalidConfigurationError."""
    try:
        return GridType(grid_type)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Invalid grid type: {grid_type!r}",
            context={"type": grid_type, "valid": [t.value for t in GridType]},
        ) from exc


class HexGrid:
    """Bounds-checked 2-D cell storage with hex neighbor lookup.

    Cells are stored row-major as ``cells[row][col]``. Out-of-range reads
    return None and out-of-range writes are ignored.
    """

    def __init__(self, columns: int, rows: int, grid_type: Any = GridType.ODD_R):
        if not isinstance(columns, int) or not isinstance(rows, int) \
                or columns <= 0 or rows <= 0:
            raise InvalidConfigurationError(
                "Grid dimensions must be positive integers",
                context={"columns": columns, "rows": rows},
            )
        self.columns = columns
        self.rows = rows
        self.type = parse_grid_type(grid_type)
        self.cells: List[List[Any]] = self._empty_cells()

    def _empty_cells(self) -> List[List[Any]]:
        return [[None] * self.columns for _ in range(self.rows)]

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.columns and 0 <= row < self.rows

    def _get_cell(self, col: int, row: int) -> Any:
        if not self.in_bounds(col, row):
            return None
        return self.cells[row][col]

    def get(self, col: int, row: int) -> Any:
        return self._get_cell(col, row)

    def set(self, col: int, row: int, value: Any) -> None:
        if self.in_bounds(col, row):
            self.cells[row][col] = value

    def remove(self, col: int, row: int) -> Any:
        """Clear a cell and return its previous value."""
        if not self.in_bounds(col, row):
            return None
        previous = self.cells[row][col]
        self.cells[row][col] = None
        return previous

    def directions(self, col: int, row: int) -> Tuple[Tuple[int, int], ...]:
        """Neighbor offsets for the cell at (col, row)."""
        parity = (row if self.type.is_row_offset else col) & 1
        return DIRECTIONS[self.type][parity]

    def neighbor_coordinates(self, col: int, row: int) -> List[Tuple[int, int]]:
        """In-range neighbor coordinates, occupied or not."""
        result = []
        for dcol, drow in self.directions(col, row):
            ncol, nrow = col + dcol, row + drow
            if self.in_bounds(ncol, nrow):
                result.append((ncol, nrow))
        return result

    def get_adjacents(self, col: int, row: int) -> List[Cell]:
        """Occupied, in-range neighbors of (col, row)."""
        adjacents = []
        for ncol, nrow in self.neighbor_coordinates(col, row):
            value = self._get_cell(ncol, nrow)
            if value is not None:
                adjacents.append(Cell(ncol, nrow, value))
        return adjacents

    def __iter__(self) -> Iterator[Cell]:
        for row in range(self.rows):
            for col in range(self.columns):
                yield Cell(col, row, self.cells[row][col])

    def for_each(self, fn: Callable[[Any, int, int], Any]) -> None:
        for cell in self:
            fn(cell.value, cell.col, cell.row)

    def clear(self) -> None:
        self.cells = self._empty_cells()

    def clone(self) -> HexGrid:
        cloned = self.__class__(self.columns, self.rows, self.type)
        cloned.cells = copy.deepcopy(self.cells)
        return cloned

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "columns": self.columns,
            "rows": self.rows,
            "cells": copy.deepcopy(self.cells),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> HexGrid:
        grid = cls(data["columns"], data["rows"], data["type"])
        cells = data.get("cells")
        if cells is not None:
            for row, values in enumerate(cells):
                for col, value in enumerate(values):
                    grid.set(col, row, copy.deepcopy(value))
        return grid

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.columns}x{self.rows}, {self.type.value})"
