"""HistorySession: coalesced, depth-bounded undo/redo over tree snapshots.

Recording is two-phase.  ``stage()`` (alias ``record()``) holds a snapshot as
*pending* and restarts a debounce timer; any later stage inside the window
replaces the pending snapshot rather than queueing beside it.  ``flush()`` is
the only path that pushes onto the undo stack.  It runs when the timer fires,
when a caller invokes it directly, before every undo/redo and on ``close()``,
so a staged snapshot is either pushed whole or still pending, never half-way.

Stacks:
- undo: oldest first.  Push at the end, pop from the end, evict from the front.
- redo: most-recently-undone first.  Any push to the undo stack clears it.

Depth limit changes are prospective.  Lowering the limit does not truncate the
stacks; each later push evicts the entry it displaces plus at most one
pre-existing surplus entry, so an oversized stack shrinks by one per push.

The timer runs on a daemon thread, so every state change takes the session's
re-entrant lock.  Callers must still serialize their own calls to a session.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from types import TracebackType

from json_tree_engine.history.config import HistoryConfig, validate_depth_limit
from json_tree_engine.tree.nodes import RootNode

__all__ = ["HistorySession"]

logger = logging.getLogger(__name__)


class HistorySession:
    """Undo/redo history for one open document.

    Args:
        config: History settings.  Defaults to ``HistoryConfig()`` when None.

    Example::

        session = HistorySession(HistoryConfig(coalesce_window=None))
        session.stage(before_edit)
        session.flush()
        current = session.undo(current)   # returns before_edit
    """

    def __init__(self, config: HistoryConfig | None = None) -> None:
        self._config: HistoryConfig = config if config is not None else HistoryConfig()
        self._depth_limit: int = self._config.depth_limit
        self._undo: deque[RootNode] = deque()
        self._redo: deque[RootNode] = deque()
        self._pending: RootNode | None = None
        self._timer: threading.Timer | None = None
        self._lock = threading.RLock()
        self._closed = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> HistoryConfig:
        return self._config

    @property
    def depth_limit(self) -> int:
        """Current bound on each stack's length."""
        return self._depth_limit

    @property
    def can_undo(self) -> bool:
        """True when an undo would change the current tree (pending included)."""
        with self._lock:
            return bool(self._undo) or self._pending is not None

    @property
    def can_redo(self) -> bool:
        """True when the redo stack is non-empty and no edit is pending."""
        with self._lock:
            return bool(self._redo) and self._pending is None

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    @property
    def undo_stack(self) -> tuple[RootNode, ...]:
        """Snapshot of the undo stack, oldest first."""
        with self._lock:
            return tuple(self._undo)

    @property
    def redo_stack(self) -> tuple[RootNode, ...]:
        """Snapshot of the redo stack, most recently undone first."""
        with self._lock:
            return tuple(self._redo)

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def stage(self, snapshot: RootNode, *, keep_pending: bool = False) -> None:
        """Hold ``snapshot`` as the pending entry and restart the coalescing window.

        Args:
            snapshot:     Tree to record once the window closes.
            keep_pending: When True and a snapshot is already pending, keep
                that one and only restart the window.  Lets a caller record
                the state *before* a burst of edits.
        """
        with self._lock:
            self._cancel_timer()
            if not (keep_pending and self._pending is not None):
                self._pending = snapshot
            window = self._config.coalesce_window
            if self._closed or window == 0:
                self._flush_locked()
                return
            if window is None:
                return
            timer = threading.Timer(window, self._on_timer)
            timer.daemon = True
            self._timer = timer
            timer.start()

    record = stage

    def flush(self) -> bool:
        """Push the pending snapshot, if any.  Returns True if an entry was pushed."""
        with self._lock:
            self._cancel_timer()
            return self._flush_locked()

    def _on_timer(self) -> None:
        with self._lock:
            # A stage() that raced this timer already replaced it.
            if self._timer is not threading.current_thread():
                return
            self._timer = None
            self._flush_locked()

    def _flush_locked(self) -> bool:
        snapshot = self._pending
        if snapshot is None:
            return False
        self._pending = None
        self._undo.append(snapshot)
        self._redo.clear()
        self._trim(self._undo, from_front=True)
        logger.debug("History push: undo=%d limit=%d", len(self._undo), self._depth_limit)
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _trim(self, stack: deque[RootNode], *, from_front: bool) -> None:
        # One entry for the push itself, one for any surplus left by a lowered limit.
        for _ in range(2):
            if len(stack) <= self._depth_limit:
                return
            if from_front:
                stack.popleft()
            else:
                stack.pop()
            logger.debug("History evict: size=%d limit=%d", len(stack), self._depth_limit)

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def undo(self, current: RootNode) -> RootNode:
        """Return the previous snapshot, moving ``current`` onto the redo stack.

        Returns ``current`` unchanged when there is nothing to undo.
        """
        with self._lock:
            self.flush()
            if not self._undo:
                logger.debug("History undo: nothing to undo")
                return current
            snapshot = self._undo.pop()
            self._redo.appendleft(current)
            self._trim(self._redo, from_front=False)
            logger.debug("History undo: undo=%d redo=%d", len(self._undo), len(self._redo))
            return snapshot

    def redo(self, current: RootNode) -> RootNode:
        """Return the most recently undone snapshot, moving ``current`` onto the undo stack.

        Returns ``current`` unchanged when there is nothing to redo.
        """
        with self._lock:
            self.flush()
            if not self._redo:
                logger.debug("History redo: nothing to redo")
                return current
            snapshot = self._redo.popleft()
            self._undo.append(current)
            self._trim(self._undo, from_front=True)
            logger.debug("History redo: undo=%d redo=%d", len(self._undo), len(self._redo))
            return snapshot

    # ------------------------------------------------------------------
    # Configuration / lifecycle
    # ------------------------------------------------------------------

    def set_depth_limit(self, depth_limit: int) -> None:
        """Change the stack bound for future pushes; existing entries are kept.

        Raises:
            ValueError: If ``depth_limit`` is not a positive integer.
        """
        with self._lock:
            self._depth_limit = validate_depth_limit(depth_limit)
            logger.debug("History depth limit set to %d", depth_limit)

    def clear(self) -> None:
        """Drop both stacks and any pending snapshot."""
        with self._lock:
            self._cancel_timer()
            self._pending = None
            self._undo.clear()
            self._redo.clear()

    def close(self) -> None:
        """Cancel the timer and push any pending snapshot.  Safe to call twice."""
        with self._lock:
            self.flush()
            self._closed = True

    def __enter__(self) -> HistorySession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
