"""
Board Events

Event kinds raised by the Board and the listener registry that delivers
them. Delivery is synchronous and can be suppressed for speculative work.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class BoardEvent(str, Enum):
    """Notifications fired by Board.

    SET (index, piece), REMOVE (index, piece or None),
    FORM (list of HexagonInfo), DESTROY (list of (col, row)), CLEAR ().
    """
    SET = "set"
    REMOVE = "remove"
    FORM = "form"
    DESTROY = "destroy"
    CLEAR = "clear"


def parse_event(event_type: Any) -> BoardEvent:
    try:
        return BoardEvent(event_type)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Invalid event type: {event_type!r}",
            context={
                "event_type": event_type,
                "valid": [event.value for event in BoardEvent],
            },
        ) from exc


class EventRegistry:
    """Listener sets keyed by event kind; a callback fires once per event."""

    def __init__(self) -> None:
        # dicts used as insertion-ordered sets
        self._listeners: Dict[BoardEvent, Dict[Listener, None]] = {
            event: {} for event in BoardEvent
        }
        self.suppressed = False

    def add(self, event_type: Any, listener: Listener) -> None:
        event = parse_event(event_type)
        if not callable(listener):
            raise InvalidArgumentError(
                "Listener must be callable",
                context={"event_type": event.value},
            )
        self._listeners[event][listener] = None

    def remove(self, event_type: Any, listener: Listener) -> None:
        event = parse_event(event_type)
        self._listeners[event].pop(listener, None)

    def listeners(self, event_type: Any) -> tuple:
        return tuple(self._listeners[parse_event(event_type)])

    def emit(self, event: BoardEvent, *args: Any) -> None:
        if self.suppressed:
            return
        for listener in tuple(self._listeners[event]):
            listener(*args)

    def copy(self) -> EventRegistry:
        registry = EventRegistry()
        for event, listeners in self._listeners.items():
            registry._listeners[event] = dict(listeners)
        return registry

    def __len__(self) -> int:
        return sum(len(listeners) for listeners in self._listeners.values())
