"""
Triangle Hex Grid

Each hexagon cell is split into six numbered triangles (1..6). A cell holds
a dict ``{triangle: color}`` and is dropped once its last triangle clears.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import IndexOutOfRangeError, InvalidArgumentError
from .hex_grid import HexGrid
from .models import TRIANGLE_COUNT, CellRef


TRIANGLES = tuple(range(1, TRIANGLE_COUNT + 1))


def _check_triangle(triangle: Any) -> int:
    if isinstance(triangle, bool) or not isinstance(triangle, int) \
            or triangle < 1 or triangle > TRIANGLE_COUNT:
        raise IndexOutOfRangeError(
            "Triangle index must be between 1 and 6",
            context={"triangle": triangle},
        )
    return triangle


class TriHexGrid(HexGrid):
    """HexGrid whose cells are triangle-number to color mappings."""

    def get(self, col: int, row: int, triangle: int) -> Optional[Any]:
        _check_triangle(triangle)
        cell = self._get_cell(col, row)
        if cell is None:
            return None
        return cell.get(triangle)

    def set(self, positions: Iterable[CellRef], value: Any) -> None:
        """Paint ``value`` into every (col, row, triangle) reference."""
        positions = list(positions)
        for _, _, triangle in positions:
            _check_triangle(triangle)
        for col, row, triangle in positions:
            if not self.in_bounds(col, row):
                continue
            cell = self.cells[row][col]
            if cell is None:
                cell = self.cells[row][col] = {}
            cell[triangle] = value

    def remove(self, positions: Iterable[CellRef]) -> List[Optional[Any]]:
        """Clear every reference and return the previous colors in order."""
        positions = list(positions)
        for _, _, triangle in positions:
            _check_triangle(triangle)
        previous = []
        for col, row, triangle in positions:
            cell = self._get_cell(col, row)
            if cell is None:
                previous.append(None)
                continue
            previous.append(cell.pop(triangle, None))
            if not cell:
                self.cells[row][col] = None
        return previous

    def get_hexagon(self, col: int, row: int) -> List[Optional[Any]]:
        """Colors of triangles 1..6, None where unpainted."""
        cell = self._get_cell(col, row)
        if cell is None:
            return [None] * TRIANGLE_COUNT
        return [cell.get(triangle) for triangle in TRIANGLES]

    def set_hexagon(self, col: int, row: int, values: Sequence[Optional[Any]]) -> None:
        """Write all six triangles at once; a None entry clears that triangle."""
        if len(values) != TRIANGLE_COUNT:
            raise InvalidArgumentError(
                "A hexagon needs exactly 6 triangle values",
                context={"received": len(values)},
            )
        if not self.in_bounds(col, row):
            return
        cell = {
            triangle: value
            for triangle, value in zip(TRIANGLES, values)
            if value is not None
        }
        self.cells[row][col] = cell or None

    def remove_hexagon(self, col: int, row: int) -> List[Optional[Any]]:
        previous = self.get_hexagon(col, row)
        if self.in_bounds(col, row):
            self.cells[row][col] = None
        return previous

    def is_full(self, col: int, row: int) -> bool:
        cell = self._get_cell(col, row)
        if cell is None:
            return False
        return all(cell.get(triangle) is not None for triangle in TRIANGLES)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["cells"] = [
            [dict(cell) if cell else None for cell in row]
            for row in self.cells
        ]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TriHexGrid:
        grid = cls(data["columns"], data["rows"], data["type"])
        for row, values in enumerate(data.get("cells") or []):
            for col, cell in enumerate(values):
                if not cell:
                    continue
                for triangle, color in cell.items():
                    # JSON object keys arrive as strings
                    grid.set([(col, row, int(triangle))], color)
        return grid
