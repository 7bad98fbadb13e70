"""
Tridecco board engine.

Hex-grid tile placement: pieces paint triangles of a TriHexGrid and the
Board tracks which hexagons end up a single color.
"""

from .board import Board, HistoryEntry
from .errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidConfigurationError,
    InvalidStateError,
    TrideccoError,
)
from .events import BoardEvent
from .hex_grid import Cell, HexGrid
from .maps import get_default_map, load_position_map
from .models import GridType, HexagonInfo, HistoryOp, PositionMap, PositionRecord
from .piece import Piece
from .tri_hex_grid import TriHexGrid

__version__ = "1.0.0"

__all__ = [
    "Board",
    "BoardEvent",
    "Cell",
    "GridType",
    "HexGrid",
    "HexagonInfo",
    "HistoryEntry",
    "HistoryOp",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "InvalidStateError",
    "Piece",
    "PositionMap",
    "PositionRecord",
    "TriHexGrid",
    "TrideccoError",
    "get_default_map",
    "load_position_map",
]
