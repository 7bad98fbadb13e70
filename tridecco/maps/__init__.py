"""
Position Maps

Loading of JSON position maps and the bundled default map. The default is
read once and cached; PositionMap is frozen so Boards share it safely.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

from ..config import MAP_PATH
from ..errors import InvalidConfigurationError
from ..models import PositionMap

logger = logging.getLogger(__name__)

BUNDLED_MAP_PATH = Path(__file__).with_name("default.json")


def load_position_map(path: Union[str, Path]) -> PositionMap:
    """Read and validate a JSON position map file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidConfigurationError(
            f"Could not read position map: {exc}",
            context={"path": str(path)},
        ) from exc
    position_map = PositionMap.from_dict(data)
    logger.debug(
        "Loaded position map %s (%dx%d, %d positions)",
        path, position_map.columns, position_map.rows,
        len(position_map.positions),
    )
    return position_map


@lru_cache(maxsize=1)
def get_default_map() -> PositionMap:
    """The map used when a Board is built without one.

    TRIDECCO_MAP_PATH overrides the bundled file.
    """
    return load_position_map(MAP_PATH or BUNDLED_MAP_PATH)


__all__ = ["BUNDLED_MAP_PATH", "get_default_map", "load_position_map"]
