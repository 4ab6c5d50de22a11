"""history subpackage: coalesced, depth-bounded undo/redo.

Example::

    from json_tree_engine.history import HistoryConfig, HistorySession

    with HistorySession(HistoryConfig(depth_limit=50)) as session:
        session.stage(snapshot)
"""

from __future__ import annotations

from json_tree_engine.history.config import (
    DEFAULT_COALESCE_WINDOW,
    DEFAULT_DEPTH_LIMIT,
    HistoryConfig,
)
from json_tree_engine.history.session import HistorySession

__all__ = [
    "DEFAULT_COALESCE_WINDOW",
    "DEFAULT_DEPTH_LIMIT",
    "HistoryConfig",
    "HistorySession",
]
