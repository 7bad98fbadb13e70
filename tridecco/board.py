"""
Board

Top-level game state: a TriHexGrid painted by placed pieces, one slot per
map position, the set of completed hexagons with their colors, an undo
history and event listeners.

Only references A-F of a position are re-checked for hexagon completion
while all eight (A-H) are painted and cleared. A hexagon reached only
through G/H references is therefore never tracked by that position.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .config import SNAPSHOT_HISTORY
from .errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidStateError,
)
from .events import BoardEvent, EventRegistry, Listener
from .maps import get_default_map
from .models import (
    BoardSnapshot,
    HexagonInfo,
    HistoryOp,
    PositionMap,
    PositionRecord,
)
from .piece import Piece
from .tri_hex_grid import TriHexGrid

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class HistoryEntry:
    """One reversible board operation.

    ``piece`` is the removed piece for REMOVE entries and None for SET.
    """
    op: HistoryOp
    index: int
    piece: Optional[Piece] = None


def hexagon_key(col: int, row: int) -> str:
    return f"{col}-{row}"


def parse_hexagon_key(key: str) -> Coordinate:
    col, row = key.split("-")
    return int(col), int(row)


class Board:
    """Placement, removal and hexagon tracking over a position map.

    Args:
        position_map: A PositionMap or its dict form. Defaults to the
            bundled map (or TRIDECCO_MAP_PATH when set).

    Raises:
        InvalidConfigurationError: If the map is malformed
    """

    def __init__(self, position_map: Any = None):
        if position_map is None:
            position_map = get_default_map()
        self._map: PositionMap = PositionMap.from_dict(position_map)
        self._grid = TriHexGrid(self._map.columns, self._map.rows, self._map.type)
        self._slots: List[Optional[Piece]] = [None] * len(self._map.positions)
        # key -> color, insertion ordered
        self._hexagons: Dict[str, str] = {}
        self._history: List[HistoryEntry] = []
        self._events = EventRegistry()
        logger.debug(
            "Board created: %dx%d %s grid, %d positions",
            self._map.columns, self._map.rows, self._map.type.value,
            len(self._slots),
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def map(self) -> PositionMap:
        return self._map

    @property
    def grid(self) -> TriHexGrid:
        return self._grid

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> Tuple[Optional[Piece], ...]:
        return tuple(self._slots)

    @property
    def hexagons(self) -> Tuple[str, ...]:
        """Keys ("col-row") of tracked complete hexagons."""
        return tuple(self._hexagons)

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    # =========================================================================
    # Validation helpers
    # =========================================================================

    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, int) \
                or index < 0 or index >= len(self._slots):
            raise IndexOutOfRangeError(
                "Index out of bounds", index=index, size=len(self._slots)
            )
        return index

    @staticmethod
    def _check_piece(piece: Any) -> Piece:
        if not isinstance(piece, Piece):
            raise InvalidArgumentError(
                "Piece must be an instance of Piece",
                context={"received": type(piece).__name__},
            )
        return piece

    def _check_empty(self, index: int) -> None:
        if self._slots[index] is not None:
            raise InvalidStateError(
                "Position is already occupied",
                context={"index": index, "piece": self._slots[index].colors_key},
            )

    def _debug(self, msg: str, *args: Any) -> None:
        # speculative work stays out of the log
        if not self._events.suppressed:
            logger.debug(msg, *args)

    def _position(self, index: int) -> PositionRecord:
        return self._map.positions[index]

    # =========================================================================
    # Mutation
    # =========================================================================

    def _set(self, index: int, piece: Piece, record: bool) -> None:
        position = self._position(index)
        self._slots[index] = piece
        self._grid.set(position.first_color_cells(), piece.colors[0])
        self._grid.set(position.second_color_cells(), piece.colors[1])

        for key in self.get_related_hexagons(index):
            col, row = parse_hexagon_key(key)
            if self.is_complete_hexagon(col, row):
                self._hexagons[key] = self._grid.get(col, row, 1)
            else:
                self._hexagons.pop(key, None)

        if record:
            self._history.append(HistoryEntry(HistoryOp.SET, index))
        self._debug("set %d -> %s", index, piece.colors_key)
        self._events.emit(BoardEvent.SET, index, piece)

    def _remove(self, index: int, record: bool) -> Optional[Piece]:
        position = self._position(index)
        related = self.get_related_hexagons(index)
        self._grid.remove(position.cells())
        piece = self._slots[index]
        self._slots[index] = None

        destroyed: List[Coordinate] = []
        for key in related:
            if key in self._hexagons:
                del self._hexagons[key]
                destroyed.append(parse_hexagon_key(key))

        if record:
            self._history.append(HistoryEntry(HistoryOp.REMOVE, index, piece))
        self._debug(
            "remove %d (%s), destroyed %s",
            index, piece.colors_key if piece else None, destroyed,
        )
        for coordinate in destroyed:
            self._events.emit(BoardEvent.DESTROY, [coordinate])
        self._events.emit(BoardEvent.REMOVE, index, piece)
        return piece

    def set(self, index: int, piece: Piece) -> None:
        """Write a piece into a slot, overwriting whatever is there.

        Raises:
            IndexOutOfRangeError: If index is not a valid position
            InvalidArgumentError: If piece is not a Piece
        """
        self._check_index(index)
        self._check_piece(piece)
        self._set(index, piece, record=True)

    def place(self, index: int, piece: Piece) -> List[HexagonInfo]:
        """Place a piece on an empty position.

        Returns:
            Hexagons completed by this placement, in completion order

        Raises:
            IndexOutOfRangeError: If index is not a valid position
            InvalidStateError: If the position is occupied
            InvalidArgumentError: If piece is not a Piece
        """
        self._check_index(index)
        self._check_empty(index)
        self._check_piece(piece)

        before = set(self._hexagons)
        self.set(index, piece)
        formed = [
            HexagonInfo(coordinate=parse_hexagon_key(key), color=color)
            for key, color in self._hexagons.items()
            if key not in before
        ]
        if formed:
            self._debug("place %d formed %s", index, [h.key for h in formed])
            self._events.emit(BoardEvent.FORM, formed)
        return formed

    def remove(self, index: int) -> Optional[Piece]:
        """Clear a position and return the piece that was there, if any."""
        self._check_index(index)
        return self._remove(index, record=True)

    def back(self, steps: int = 1) -> int:
        """Undo up to ``steps`` operations, most recent first.

        Undoing never adds history records.

        Returns:
            The number of operations undone
        """
        if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
            return 0
        count = min(steps, len(self._history))
        for _ in range(count):
            entry = self._history.pop()
            if entry.op is HistoryOp.SET:
                self._remove(entry.index, record=False)
            elif entry.piece is not None:
                self._set(entry.index, entry.piece, record=False)
        self._debug("back: requested %d, undone %d", steps, count)
        return count

    def clear(self) -> None:
        """Reset grid, slots, hexagons and history. Listeners stay attached."""
        self._grid.clear()
        self._slots = [None] * len(self._map.positions)
        self._hexagons.clear()
        self._history.clear()
        logger.debug("Board cleared")
        self._events.emit(BoardEvent.CLEAR)

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, index: int) -> Optional[Piece]:
        return self._slots[self._check_index(index)]

    def is_empty(self, index: int) -> bool:
        return self.get(index) is None

    def get_related_hexagons(self, index: int) -> List[str]:
        """Deduplicated hexagon keys of references A-F of a position."""
        self._check_index(index)
        keys: Dict[str, None] = {}
        for col, row, _ in self._position(index).related_cells():
            keys[hexagon_key(col, row)] = None
        return list(keys)

    def is_complete_hexagon(self, col: int, row: int) -> bool:
        """True when all six triangles are painted with one color.

        Raises:
            InvalidArgumentError: If (col, row) is outside the map
        """
        if not (0 <= col < self._map.columns and 0 <= row < self._map.rows):
            raise InvalidArgumentError(
                "Column or row out of bounds",
                context={"col": col, "row": row},
            )
        values = self._grid.get_hexagon(col, row)
        if values[0] is None:
            return False
        for i in range(1, len(values)):
            if values[i] is None or values[i] != values[i - 1]:
                return False
        return True

    def get_complete_hexagons(self) -> List[HexagonInfo]:
        return [
            HexagonInfo(coordinate=parse_hexagon_key(key), color=color)
            for key, color in self._hexagons.items()
        ]

    def get_empty_positions(self) -> List[int]:
        return [i for i, piece in enumerate(self._slots) if piece is None]

    def get_occupied_positions(self) -> List[int]:
        return [i for i, piece in enumerate(self._slots) if piece is not None]

    def get_adjacent_positions(self) -> List[int]:
        """Positions adjacent to any occupied position, first-seen order."""
        seen: Dict[int, None] = {}
        for index in self.get_occupied_positions():
            for adjacent in self._position(index).adjacents:
                seen[adjacent] = None
        return list(seen)

    def get_available_positions(self) -> List[int]:
        """Empty positions adjacent to at least one occupied position."""
        adjacent = set(self.get_adjacent_positions())
        return [i for i in self.get_empty_positions() if i in adjacent]

    def get_hexagons_formed(self, index: int, piece: Piece) -> List[HexagonInfo]:
        """Hexagons that placing ``piece`` at ``index`` would complete.

        The placement is performed and undone with notifications suppressed,
        leaving slots, hexagons and history unchanged.
        """
        self._check_index(index)
        self._check_empty(index)
        self._check_piece(piece)

        suppressed = self._events.suppressed
        self._events.suppressed = True
        try:
            formed = self.place(index, piece)
            self.back(1)
        finally:
            self._events.suppressed = suppressed
        return formed

    def count_hexagons_formed(self, index: int, piece: Piece) -> int:
        return len(self.get_hexagons_formed(index, piece))

    def get_hexagon_positions(self, piece: Piece) -> List[Tuple[int, int]]:
        """Available positions where ``piece`` completes hexagons.

        Returns:
            (index, count) pairs with count > 0, highest count first; ties
            keep position order
        """
        self._check_piece(piece)
        results = []
        for index in self.get_available_positions():
            count = self.count_hexagons_formed(index, piece)
            if count > 0:
                results.append((index, count))
        results.sort(key=lambda item: item[1], reverse=True)
        return results

    def get_random_position(
        self,
        is_edge: bool = False,
        excluded: Iterable[int] = (),
        rng: Optional[random.Random] = None,
    ) -> Optional[int]:
        """Uniformly random position index, or None if nothing qualifies.

        Args:
            is_edge: Only consider positions flagged as edges
            excluded: Indices never returned
            rng: Random source; the module-level generator when omitted
        """
        excluded = set(excluded)
        candidates = [
            index
            for index, position in enumerate(self._map.positions)
            if index not in excluded and (not is_edge or position.is_edge)
        ]
        if not candidates:
            return None
        return (rng or random).choice(candidates)

    # =========================================================================
    # Events
    # =========================================================================

    def add_event_listener(self, event_type: Any, listener: Listener) -> None:
        """Register a callback for "set", "remove", "form", "destroy" or "clear".

        Raises:
            InvalidArgumentError: If event_type is not a known event
        """
        self._events.add(event_type, listener)

    def remove_event_listener(self, event_type: Any, listener: Listener) -> None:
        self._events.remove(event_type, listener)

    # =========================================================================
    # Copying and serialization
    # =========================================================================

    def clone(self, with_listeners: bool = False, with_history: bool = False) -> Board:
        board = Board(self._map)
        board._grid = self._grid.clone()
        board._slots = [piece.clone() if piece else None for piece in self._slots]
        board._hexagons = dict(self._hexagons)
        if with_history:
            board._history = list(self._history)
        if with_listeners:
            board._events = self._events.copy()
            board._events.suppressed = False
        return board

    def to_dict(self, with_history: Optional[bool] = None) -> Dict[str, Any]:
        """Serialize to JSON-compatible data.

        Args:
            with_history: Include undo history; defaults to
                TRIDECCO_SNAPSHOT_HISTORY
        """
        if with_history is None:
            with_history = SNAPSHOT_HISTORY
        history = []
        if with_history:
            history = [
                {
                    "op": entry.op,
                    "index": entry.index,
                    "piece": entry.piece.to_dict() if entry.piece else None,
                }
                for entry in self._history
            ]
        snapshot = BoardSnapshot(
            map=self._map,
            grid=[[dict(cell) if cell else None for cell in row] for row in self._grid.cells],
            slots=[piece.to_dict() if piece else None for piece in self._slots],
            hexagons=list(self._hexagons),
            hexagon_colors=dict(self._hexagons),
            history=history,
        )
        return snapshot.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Any) -> Board:
        """Rebuild a board from ``to_dict`` output.

        Raises:
            InvalidArgumentError: If the snapshot is malformed
        """
        try:
            snapshot = data if isinstance(data, BoardSnapshot) \
                else BoardSnapshot.model_validate(data)
        except ValidationError as exc:
            raise InvalidArgumentError(
                "Invalid board snapshot",
                context={"errors": exc.errors(include_url=False)},
            ) from exc

        board = cls(snapshot.map)
        if len(snapshot.slots) != board.size:
            raise InvalidArgumentError(
                "Snapshot slot count does not match the map",
                context={"slots": len(snapshot.slots), "size": board.size},
            )
        if len(snapshot.grid) != board._map.rows or any(
            len(row) != board._map.columns for row in snapshot.grid
        ):
            raise InvalidArgumentError(
                "Snapshot grid does not match the map dimensions",
                context={"columns": board._map.columns, "rows": board._map.rows},
            )

        for row, cells in enumerate(snapshot.grid):
            for col, cell in enumerate(cells):
                for triangle, color in (cell or {}).items():
                    board._grid.set([(col, row, triangle)], color)

        board._slots = [
            Piece.from_dict(piece) if piece else None for piece in snapshot.slots
        ]
        for key in snapshot.hexagons:
            color = snapshot.hexagon_colors.get(key)
            if color is None:
                col, row = parse_hexagon_key(key)
                color = board._grid.get(col, row, 1)
            board._hexagons[key] = color
        board._history = [
            HistoryEntry(
                entry.op,
                board._check_index(entry.index),
                Piece.from_dict(entry.piece) if entry.piece else None,
            )
            for entry in snapshot.history
        ]
        logger.debug(
            "Board restored: %d occupied, %d hexagons, %d history entries",
            len(board.get_occupied_positions()), len(board._hexagons),
            len(board._history),
        )
        return board

    def __repr__(self) -> str:
        return (
            f"Board({self._map.columns}x{self._map.rows}, "
            f"{len(self.get_occupied_positions())}/{self.size} occupied, "
            f"{len(self._hexagons)} hexagons)"
        )
