"""TreeIndex: id-keyed lookup over one immutable tree snapshot.

A single iterative walk records, for every node id, the node itself, its
parent's id, its position among the parent's children and its depth.  The
Mutator uses this to locate nodes, check subtree membership and rebuild only
the ancestor path of an edit.

Because snapshots are immutable, an index stays valid for the lifetime of its
root.  ``index_tree`` caches indexes in a ``cachetools.LRUCache`` keyed by the
root's ``id()``.  Each cache value keeps a strong reference to its root, so a
cached key can never be recycled for a different object while it is cached.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass

from cachetools import LRUCache

from json_tree_engine.errors import DuplicateIdError
from json_tree_engine.tree.nodes import Node, RootNode, has_children

__all__ = ["IndexEntry", "TreeIndex", "find_node", "index_tree"]

_CACHE_SIZE = 64

_cache: LRUCache[int, tuple[RootNode, TreeIndex]] = LRUCache(maxsize=_CACHE_SIZE)
_cache_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """Location of one node within its tree.

    Attributes:
        node:      The node itself.
        parent_id: Id of the containing node; None for the top node.
        position:  Index within the parent's children; 0 for the top node.
        depth:     1 for the top node, parent depth + 1 below it.
    """

    node: Node
    parent_id: str | None
    position: int
    depth: int


class TreeIndex:
    """Id -> IndexEntry map for a tree (or any detached subtree).

    Raises:
        DuplicateIdError: If two nodes under ``top`` share an id.
    """

    def __init__(self, top: Node) -> None:
        self.top = top
        self._entries: dict[str, IndexEntry] = {}

        stack: list[IndexEntry] = [IndexEntry(top, None, 0, 1)]
        while stack:
            entry = stack.pop()
            node = entry.node
            if node.id in self._entries:
                raise DuplicateIdError(node.id)
            self._entries[node.id] = entry
            if has_children(node):
                for position, child in enumerate(node.children):  # type: ignore[union-attr]
                    stack.append(IndexEntry(child, node.id, position, entry.depth + 1))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, node_id: str) -> IndexEntry | None:
        """Return the entry for ``node_id``, or None when absent."""
        return self._entries.get(node_id)

    def ancestors(self, node_id: str) -> list[str]:
        """Return ancestor ids of ``node_id``, nearest parent first."""
        result: list[str] = []
        entry = self._entries.get(node_id)
        while entry is not None and entry.parent_id is not None:
            result.append(entry.parent_id)
            entry = self._entries[entry.parent_id]
        return result

    def subtree_ids(self, node_id: str) -> set[str]:
        """Return the ids of ``node_id`` and all of its descendants."""
        entry = self._entries.get(node_id)
        if entry is None:
            return set()
        return set(TreeIndex(entry.node))


def index_tree(root: RootNode) -> TreeIndex:
    """Return the (possibly cached) TreeIndex for ``root``."""
    key = id(root)
    with _cache_lock:
        cached = _cache.get(key)
        if cached is not None and cached[0] is root:
            return cached[1]

    index = TreeIndex(root)
    with _cache_lock:
        _cache[key] = (root, index)
    return index


def find_node(root: RootNode, node_id: str) -> Node | None:
    """Return the node with ``node_id`` in ``root``'s tree, or None when absent."""
    entry = index_tree(root).get(node_id)
    return entry.node if entry is not None else None
