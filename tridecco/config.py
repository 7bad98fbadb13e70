"""
Runtime settings read from the environment once at import.

TRIDECCO_MAP_PATH          JSON position map replacing the bundled default
TRIDECCO_LOG_LEVEL         Default level for setup_logging (INFO)
TRIDECCO_SNAPSHOT_HISTORY  Default for Board.to_dict(with_history=...) (false)
"""

import os

MAP_PATH = os.getenv("TRIDECCO_MAP_PATH") or None
LOG_LEVEL = os.getenv("TRIDECCO_LOG_LEVEL", "INFO").upper()
SNAPSHOT_HISTORY = os.getenv("TRIDECCO_SNAPSHOT_HISTORY", "false").lower() in (
    "1",
    "true",
    "yes",
)
