"""HistoryConfig: immutable settings for a HistorySession.

HistoryConfig is a frozen (immutable) dataclass validated on construction.
A session copies the depth limit on creation; ``set_depth_limit`` changes the
live session without touching the config object.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_COALESCE_WINDOW", "DEFAULT_DEPTH_LIMIT", "HistoryConfig"]

DEFAULT_DEPTH_LIMIT = 20
DEFAULT_COALESCE_WINDOW = 0.3


def validate_depth_limit(depth_limit: object) -> int:
    """Return ``depth_limit`` if it is a positive int, else raise ValueError."""
    if isinstance(depth_limit, bool) or not isinstance(depth_limit, int) or depth_limit < 1:
        msg = f"depth_limit must be a positive integer, got {depth_limit!r}"
        raise ValueError(msg)
    return depth_limit


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Immutable configuration for undo/redo history.

    Attributes:
        depth_limit: Maximum number of entries kept on each of the undo and
            redo stacks.  Positive integer, default 20.
        coalesce_window: Debounce interval in seconds.  Snapshots staged
            within one window collapse into a single undo entry holding the
            last of them.  ``0`` records every staged snapshot immediately;
            ``None`` disables the timer so only an explicit ``flush()`` records.
            Default 0.3.
    """

    depth_limit: int = DEFAULT_DEPTH_LIMIT
    coalesce_window: float | None = DEFAULT_COALESCE_WINDOW

    def __post_init__(self) -> None:
        validate_depth_limit(self.depth_limit)
        if self.coalesce_window is not None and self.coalesce_window < 0.0:
            msg = f"coalesce_window must be >= 0.0 or None, got {self.coalesce_window}"
            raise ValueError(msg)
