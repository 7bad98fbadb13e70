"""
Pydantic Models for the Tridecco Board
Position maps, hexagon results and serialized board snapshots.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import InvalidConfigurationError

TRIANGLE_COUNT = 6

# (col, row, triangle)
CellRef = Tuple[int, int, int]


class GridType(str, Enum):
    """Offset-coordinate layout of a hex grid"""
    ODD_R = "odd-r"
    EVEN_R = "even-r"
    ODD_Q = "odd-q"
    EVEN_Q = "even-q"

    @property
    def is_row_offset(self) -> bool:
        return self in (GridType.ODD_R, GridType.EVEN_R)


class HistoryOp(str, Enum):
    """Board history operation"""
    SET = "set"
    REMOVE = "remove"


class PositionRecord(BaseModel):
    """One fixed slot of the board.

    References A-D are painted with a piece's first color, E-H with its
    second color. Only A-F take part in hexagon completion checks.
    """
    adjacents: Tuple[int, ...] = ()
    is_edge: bool = Field(False, alias="isEdge")
    a: CellRef = Field(alias="A")
    b: CellRef = Field(alias="B")
    c: CellRef = Field(alias="C")
    d: CellRef = Field(alias="D")
    e: CellRef = Field(alias="E")
    f: CellRef = Field(alias="F")
    g: CellRef = Field(alias="G")
    h: CellRef = Field(alias="H")

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="after")
    def check_triangles(self) -> "PositionRecord":
        for label, (_, _, triangle) in zip("ABCDEFGH", self.cells()):
            if triangle < 1 or triangle > TRIANGLE_COUNT:
                raise ValueError(
                    f"reference {label} has triangle {triangle}, "
                    f"expected 1..{TRIANGLE_COUNT}"
                )
        return self

    def first_color_cells(self) -> List[CellRef]:
        return [self.a, self.b, self.c, self.d]

    def second_color_cells(self) -> List[CellRef]:
        return [self.e, self.f, self.g, self.h]

    def cells(self) -> List[CellRef]:
        return self.first_color_cells() + self.second_color_cells()

    def related_cells(self) -> List[CellRef]:
        """References A-F, the ones re-checked for hexagon completion."""
        return [self.a, self.b, self.c, self.d, self.e, self.f]


class PositionMap(BaseModel):
    """Static board configuration: grid shape plus every position record."""
    type: GridType
    columns: int = Field(gt=0)
    rows: int = Field(gt=0)
    positions: Tuple[PositionRecord, ...] = Field(min_length=1)

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="after")
    def check_references(self) -> "PositionMap":
        size = len(self.positions)
        for index, position in enumerate(self.positions):
            for adjacent in position.adjacents:
                if adjacent < 0 or adjacent >= size:
                    raise ValueError(
                        f"position {index} lists adjacent {adjacent}, "
                        f"outside 0..{size - 1}"
                    )
            for col, row, _ in position.cells():
                if not (0 <= col < self.columns and 0 <= row < self.rows):
                    raise ValueError(
                        f"position {index} references cell ({col}, {row}) "
                        f"outside the {self.columns}x{self.rows} grid"
                    )
        return self

    @classmethod
    def from_dict(cls, data: Any) -> "PositionMap":
        """Validate raw map data, raising InvalidConfigurationError on failure."""
        if isinstance(data, PositionMap):
            return data
        if not isinstance(data, dict):
            raise InvalidConfigurationError(
                "Position map must be a mapping",
                context={"received": type(data).__name__},
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigurationError(
                "Invalid map provided",
                context={"errors": exc.errors(include_url=False)},
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class HexagonInfo(BaseModel):
    """A completed hexagon and its single color"""
    coordinate: Tuple[int, int]
    color: str

    class Config:
        frozen = True

    @property
    def key(self) -> str:
        return f"{self.coordinate[0]}-{self.coordinate[1]}"


class PieceSnapshot(BaseModel):
    """Serialized piece: the color pair plus caller-supplied attributes"""
    colors: List[str]
    attributes: Dict[str, Any] = Field(default_factory=dict)


class HistoryRecordSnapshot(BaseModel):
    """Serialized history entry"""
    op: HistoryOp
    index: int
    piece: Optional[PieceSnapshot] = None


class BoardSnapshot(BaseModel):
    """Full board state as produced by Board.to_dict"""
    map: PositionMap
    grid: List[List[Optional[Dict[int, str]]]]
    slots: List[Optional[PieceSnapshot]]
    hexagons: List[str] = Field(default_factory=list)
    hexagon_colors: Dict[str, str] = Field(
        default_factory=dict, alias="hexagonColors"
    )
    history: List[HistoryRecordSnapshot] = Field(default_factory=list)

    class Config:
        populate_by_name = True
