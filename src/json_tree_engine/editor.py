"""TreeEditor: the current tree plus its undo/redo history.

This is the wiring layer consumers talk to.  It owns the current RootNode
snapshot and a HistorySession, forwards edit intents to the Mutator and
offers every edit that changed the tree to the session.

History recording: before the first edit of a burst the editor stages the
tree as it stood *before* the edit.  Later edits in the same coalescing window
keep that snapshot and only restart the window, so one undo step returns to
the state before the whole burst.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

from json_tree_engine import codec, mutator
from json_tree_engine.errors import TreeEngineError
from json_tree_engine.history import HistoryConfig, HistorySession
from json_tree_engine.mutator import Placement
from json_tree_engine.tree.builder import from_json
from json_tree_engine.tree.exporter import to_json
from json_tree_engine.tree.index import find_node
from json_tree_engine.tree.nodes import Node, RootNode, new_data_node
from json_tree_engine.tree.stats import TreeStats, calculate_stats

__all__ = ["TreeEditor"]

logger = logging.getLogger(__name__)


class TreeEditor:
    """Edit and history surface over one open document.

    Every edit method returns True when the tree changed and False when the
    request was a no-op (unknown id, inapplicable variant, illegal relocation).
    Import and export failures are logged and re-raised so the caller can show
    the message; the current tree is left untouched.

    Example::

        with TreeEditor(config=HistoryConfig(coalesce_window=None)) as editor:
            editor.import_text('{"a": 1}')
            editor.flush()
            editor.add_child(editor.tree.id)
            editor.undo()

    Args:
        tree:   Initial tree.  Defaults to an empty RootNode (``{}``).
        config: History settings.  Defaults to ``HistoryConfig()``.
    """

    def __init__(
        self,
        tree: RootNode | None = None,
        config: HistoryConfig | None = None,
    ) -> None:
        self._tree: RootNode = tree if tree is not None else RootNode()
        self._session = HistorySession(config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def tree(self) -> RootNode:
        """The current tree snapshot."""
        return self._tree

    @property
    def session(self) -> HistorySession:
        return self._session

    @property
    def can_undo(self) -> bool:
        return self._session.can_undo

    @property
    def can_redo(self) -> bool:
        return self._session.can_redo

    @property
    def depth_limit(self) -> int:
        return self._session.depth_limit

    # ------------------------------------------------------------------
    # Edit surface
    # ------------------------------------------------------------------

    def _apply(self, updated: RootNode) -> bool:
        if updated is self._tree:
            return False
        self._session.stage(self._tree, keep_pending=True)
        self._tree = updated
        return True

    def find(self, node_id: str) -> Node | None:
        return find_node(self._tree, node_id)

    def update_fields(self, node_id: str, fields: Mapping[str, Any]) -> bool:
        return self._apply(mutator.update_fields(self._tree, node_id, fields))

    def replace_node(self, node: Node) -> bool:
        """Replace the node with ``node.id`` by ``node`` (the node editor's "save")."""
        return self._apply(mutator.replace_subtree(self._tree, node))

    def add_child(self, parent_id: str, node: Node | None = None) -> bool:
        """Append ``node`` (default: a fresh ``DataNode(name="new", value="")``)."""
        child = node if node is not None else new_data_node()
        return self._apply(mutator.add_child(self._tree, parent_id, child))

    def remove_child(self, parent_id: str, child_id: str) -> bool:
        return self._apply(mutator.remove_child(self._tree, parent_id, child_id))

    def relocate(self, moved_id: str, target_id: str, placement: Placement | str) -> bool:
        return self._apply(mutator.relocate(self._tree, moved_id, target_id, placement))

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_text(self, text: str | bytes) -> RootNode:
        """Replace the tree with one parsed from ``text``; recorded in history."""
        try:
            tree = codec.import_text(text)
        except TreeEngineError as exc:
            logger.warning("Import failed: %s", exc)
            raise
        self._apply(tree)
        return tree

    def load(self, value: Any) -> RootNode:
        """Replace the tree with one converted from a JSON object or array."""
        try:
            tree = from_json(value)
        except TreeEngineError as exc:
            logger.warning("Import failed: %s", exc)
            raise
        self._apply(tree)
        return tree

    def to_json(self) -> Any:
        return to_json(self._tree)

    def export_text(self) -> str:
        try:
            return codec.export_text(self._tree)
        except TreeEngineError as exc:
            logger.warning("Export failed: %s", exc)
            raise

    def export_document(self) -> codec.ExportArtifact:
        try:
            return codec.export_document(self._tree)
        except TreeEngineError as exc:
            logger.warning("Export failed: %s", exc)
            raise

    def stats(self) -> TreeStats:
        return calculate_stats(self._tree)

    # ------------------------------------------------------------------
    # History surface
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Step back one history entry.  Returns False when there was nothing to undo."""
        if not self._session.can_undo:
            return False
        self._tree = self._session.undo(self._tree)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone entry.  Returns False when there was nothing to redo."""
        if not self._session.can_redo:
            return False
        self._tree = self._session.redo(self._tree)
        return True

    def set_depth_limit(self, depth_limit: int) -> None:
        self._session.set_depth_limit(depth_limit)

    def flush(self) -> bool:
        """Close the current coalescing window now."""
        return self._session.flush()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> TreeEditor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
