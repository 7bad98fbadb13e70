"""
Tridecco Error Hierarchy

Unified exception hierarchy for the board engine. All custom exceptions
inherit from TrideccoError for easy catching and filtering.

Usage:
    from tridecco.errors import IndexOutOfRangeError, InvalidStateError

    try:
        board.place(index, piece)
    except InvalidStateError as e:
        logger.warning(f"Cannot place: {e.message} ({e.context})")
"""

from typing import Any

__all__ = [
    # Base error
    "TrideccoError",
    # Configuration errors
    "InvalidConfigurationError",
    # Call errors
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidStateError",
]


class TrideccoError(Exception):
    """Base exception for all board engine errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "TRIDECCO_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class InvalidConfigurationError(TrideccoError, ValueError):
    """Bad grid type or malformed position map.

    Raised at construction time only; never recovered internally.
    """
    code: str = "INVALID_CONFIGURATION"


# =============================================================================
# Call Errors
# =============================================================================


class IndexOutOfRangeError(TrideccoError, IndexError):
    """Position index or triangle number outside its valid range.

    Attributes:
        index: The offending index, also stored in ``context``
    """
    code: str = "INDEX_OUT_OF_RANGE"

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.index = index
        if index is not None:
            self.context["index"] = index
        if size is not None:
            self.context["size"] = size


class InvalidArgumentError(TrideccoError, ValueError):
    """Argument of the wrong type or outside the board dimensions."""
    code: str = "INVALID_ARGUMENT"


class InvalidStateError(TrideccoError):
    """Operation not allowed in the current board state.

    Raised when placing onto a position that is already occupied.
    """
    code: str = "INVALID_STATE"
