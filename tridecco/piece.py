"""
Piece

A two-colored tile. Colors are fixed at construction; the canonical
``colors_key`` ("first-second") drives equality and hashing.
"""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import InvalidArgumentError
from .models import PieceSnapshot


class Piece:
    """Immutable color pair plus caller-supplied attributes.

    Args:
        colors: Exactly two color strings, first then second
        params: Extra attributes kept alongside the colors
    """

    __slots__ = ("_colors", "_colors_key", "_attributes")

    def __init__(self, colors: Any, params: Optional[Dict[str, Any]] = None):
        if not isinstance(colors, (list, tuple)) or len(colors) != 2 \
                or not all(isinstance(color, str) for color in colors):
            raise InvalidArgumentError(
                "Colors must be an array of two strings",
                context={"colors": colors},
            )
        if params is not None and not isinstance(params, dict):
            raise InvalidArgumentError(
                "Params must be an object",
                context={"params_type": type(params).__name__},
            )
        self._colors: Tuple[str, str] = (colors[0], colors[1])
        self._colors_key = f"{colors[0]}-{colors[1]}"
        self._attributes: Dict[str, Any] = dict(params or {})

    @property
    def colors(self) -> Tuple[str, str]:
        return self._colors

    @property
    def colors_key(self) -> str:
        return self._colors_key

    @property
    def attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(self._attributes)

    def equals(self, other: Any) -> bool:
        """Same colors in the same order."""
        if not isinstance(other, Piece):
            return False
        return self._colors_key == other._colors_key

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._colors_key)

    def clone(self) -> Piece:
        # back-references to this piece resolve to the clone
        cloned = Piece(self._colors)
        cloned._attributes = copy.deepcopy(self._attributes, {id(self): cloned})
        return cloned

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": list(self._colors),
            "attributes": copy.deepcopy(self._attributes),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Piece:
        if isinstance(data, PieceSnapshot):
            data = data.model_dump()
        if not isinstance(data, dict) or "colors" not in data:
            raise InvalidArgumentError(
                "Piece data must contain colors",
                context={"received": type(data).__name__},
            )
        return cls(data["colors"], data.get("attributes") or {})

    def __repr__(self) -> str:
        return f"Piece({self._colors_key!r})"
