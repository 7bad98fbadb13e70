"""
Logging Configuration

Helpers for applications embedding the board engine. The library itself
only calls ``logging.getLogger(__name__)`` and never installs handlers on
import.

Usage:
    from tridecco.core.logging_config import setup_logging

    logger = setup_logging("tridecco", level="DEBUG")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..config import LOG_LEVEL

__all__ = [
    "COMPACT_FORMAT",
    "DEFAULT_FORMAT",
    "DETAILED_FORMAT",
    "LogContext",
    "get_logger",
    "setup_logging",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(funcName)s - %(message)s"
)

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
}

LevelType = Union[int, str]


def _resolve_level(level: Optional[LevelType]) -> int:
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(
    name: str = "tridecco",
    level: Optional[LevelType] = None,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    format_style: str = "default",
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return a named logger.

    Calling it again for the same name updates the level but never adds a
    second handler of the same kind.

    Args:
        name: Logger name
        level: Level as int or name; defaults to TRIDECCO_LOG_LEVEL
        log_file: Optional file to append records to
        console: Attach a stderr StreamHandler
        format_style: One of "default", "compact", "detailed"
        propagate: Whether records also reach ancestor loggers

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    formatter = logging.Formatter(_FORMATS.get(format_style, DEFAULT_FORMAT))

    has_console = any(
        type(h) is logging.StreamHandler for h in logger.handlers
    )
    if console and not has_console:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is not None:
        path = Path(log_file)
        has_file = any(
            isinstance(h, logging.FileHandler)
            and h.baseFilename == os.path.abspath(path)
            for h in logger.handlers
        )
        if not has_file:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level.

    Usage:
        with LogContext(logger, logging.DEBUG):
            board.place(0, piece)
    """

    def __init__(self, logger: logging.Logger, level: LevelType):
        self.logger = logger
        self.level = _resolve_level(level)
        self._previous: Optional[int] = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._previous is not None:
            self.logger.setLevel(self._previous)
