"""
Shared pytest fixtures for board engine tests.

Board fixtures are function-scoped so every test starts from an empty board
on the bundled default map.
"""

from typing import Callable, List, Tuple

import pytest

from tridecco import Board, Piece
from tridecco.events import BoardEvent


# =============================================================================
# PIECES
# =============================================================================


@pytest.fixture
def piece_factory() -> Callable[..., Piece]:
    """Factory for pieces: piece_factory("red", "blue", score=3)."""

    def _create(first: str = "red", second: str = "blue", **attributes) -> Piece:
        return Piece([first, second], attributes or None)

    return _create


# =============================================================================
# BOARDS
# =============================================================================


@pytest.fixture
def board() -> Board:
    return Board()


class ListenerRecorder:
    """Subscribes to every board event and records (event, args) tuples."""

    def __init__(self, board: Board):
        self.calls: List[Tuple[str, tuple]] = []
        for event in BoardEvent:
            board.add_event_listener(event.value, self._make(event.value))

    def _make(self, name: str):
        def _listener(*args):
            self.calls.append((name, args))
        return _listener

    def of(self, name: str) -> List[tuple]:
        return [args for event, args in self.calls if event == name]

    def names(self) -> List[str]:
        return [event for event, _ in self.calls]


@pytest.fixture
def listener_recorder(board: Board) -> ListenerRecorder:
    return ListenerRecorder(board)
