"""Pure, persistent-update edit operations on a RootNode tree.

Every operation takes a tree snapshot and returns a new one; the input is never
modified.  Only the ancestor path of an edited node is copied, so untouched
subtrees are shared between snapshots.

No-op policy: a request that cannot apply (unknown id, wrong variant, illegal
relocation target) returns the *original* tree object, so callers can test
``result is tree`` and apply edits optimistically without pre-validation.
The only error raised for structural reasons is DuplicateIdError, when a
caller-supplied node would put the same id into the tree twice.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from enum import StrEnum, auto
from typing import Any

from json_tree_engine.errors import DuplicateIdError
from json_tree_engine.tree.index import IndexEntry, TreeIndex, index_tree
from json_tree_engine.tree.nodes import (
    DataNode,
    ListNode,
    Node,
    NodeType,
    ObjectNode,
    RootNode,
    has_children,
    iter_nodes,
    nodes_equal,
)

__all__ = [
    "Placement",
    "add_child",
    "relocate",
    "remove_child",
    "replace_subtree",
    "update_fields",
]

logger = logging.getLogger(__name__)


class Placement(StrEnum):
    """Where a relocated node lands relative to its target.

    - INSERT_BEFORE -> "insert_before" : sibling immediately before the target
    - INSERT_AFTER  -> "insert_after"  : sibling immediately after the target
    - ADOPT         -> "adopt"         : last child of the target
    """

    INSERT_BEFORE = auto()
    INSERT_AFTER = auto()
    ADOPT = auto()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_NODE_CLASSES = (RootNode, ObjectNode, ListNode, DataNode)


def _rebuild_path(index: TreeIndex, node_id: str, new_node: Node) -> RootNode:
    """Put ``new_node`` where ``node_id`` sits and copy each ancestor up to the root."""
    entry = _lookup(index, node_id)
    current = new_node
    while entry.parent_id is not None:
        parent_entry = _lookup(index, entry.parent_id)
        children = list(parent_entry.node.children)  # type: ignore[union-attr]
        children[entry.position] = current
        current = dataclasses.replace(parent_entry.node, children=tuple(children))
        entry = parent_entry
    return current  # type: ignore[return-value]


def _lookup(index: TreeIndex, node_id: str) -> IndexEntry:
    entry = index.get(node_id)
    if entry is None:
        msg = f"Node {node_id!r} is not in the indexed tree"
        raise KeyError(msg)
    return entry


def _check_new_ids(index: TreeIndex, subtree: Node, replaced_id: str | None = None) -> None:
    """Raise DuplicateIdError if ``subtree`` reuses an id already in the tree.

    Ids under ``replaced_id`` are about to leave the tree, so they may reappear.
    """
    incoming = TreeIndex(subtree)
    leaving = index.subtree_ids(replaced_id) if replaced_id is not None else set()
    for node_id in incoming:
        if node_id in index and node_id not in leaving:
            raise DuplicateIdError(node_id)


def _contains_root(nodes: Iterable[Node]) -> bool:
    """True if a RootNode appears anywhere in the given subtrees."""
    return any(
        node.node_type == NodeType.ROOT for top in nodes for node in iter_nodes(top)
    )


def _fits_field(field_name: str, value: Any) -> bool:
    """Whether ``value`` may be stored in the node field ``field_name``."""
    match field_name:
        case "name":
            return value is None or isinstance(value, str)
        case "value":
            return value is None or isinstance(value, bool | int | float | str)
        case "as_list":
            return isinstance(value, bool)
        case "children":
            return isinstance(value, tuple) and all(
                isinstance(child, _NODE_CLASSES) for child in value
            )
        case _:
            return False


def _as_children(value: Any) -> Any:
    """Turn a children iterable into a tuple; other values pass through unchanged."""
    if isinstance(value, str | bytes | Mapping):
        return value
    try:
        return tuple(value)
    except TypeError:
        return value


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def update_fields(tree: RootNode, node_id: str, fields: Mapping[str, Any]) -> RootNode:
    """Shallow-merge ``fields`` into the node with ``node_id``.

    The node keeps its id and variant.  An ``id`` key, keys the variant does
    not define (e.g. ``value`` on a ListNode) and values that do not fit their
    field (a list as a DataNode value, a non-str name, children that are not
    nodes) are ignored.

    Args:
        tree:    Current tree snapshot.
        node_id: Id of the node to update.
        fields:  Field name -> new value.  ``children`` may be any iterable of
                 nodes and is stored as a tuple.

    Returns:
        A new tree, or ``tree`` itself when the node is absent or nothing
        applicable changed.

    Raises:
        DuplicateIdError: If new children reuse ids from elsewhere in the tree.
    """
    index = index_tree(tree)
    entry = index.get(node_id)
    if entry is None:
        logger.debug("Edit noop: update_fields node_not_found node=%s", node_id)
        return tree

    node = entry.node
    allowed = {f.name for f in dataclasses.fields(node)} - {"id"}
    changes: dict[str, Any] = {}
    for key, val in fields.items():
        if key not in allowed:
            continue
        if key == "children":
            val = _as_children(val)
        if not _fits_field(key, val):
            logger.debug(
                "Edit noop: update_fields bad_value node=%s field=%s type=%s",
                node_id,
                key,
                type(val).__name__,
            )
            continue
        changes[key] = val
    if "children" in changes and _contains_root(changes["children"]):
        logger.debug("Edit noop: update_fields root_as_child node=%s", node_id)
        return tree
    if not changes:
        logger.debug(
            "Edit noop: update_fields no_applicable_fields node=%s fields=%s",
            node_id,
            sorted(fields),
        )
        return tree

    updated = dataclasses.replace(node, **changes)
    if nodes_equal(updated, node):
        return tree
    if "children" in changes:
        _check_new_ids(index, updated, replaced_id=node_id)
    return _rebuild_path(index, node_id, updated)


def replace_subtree(tree: RootNode, replacement: Node) -> RootNode:
    """Replace the node whose id equals ``replacement.id`` with ``replacement``.

    The top node may only be replaced by a RootNode, and a RootNode may only
    replace the top node; a RootNode anywhere inside ``replacement`` makes the
    request a no-op as well.

    Raises:
        DuplicateIdError: If ``replacement`` reuses ids from elsewhere in the tree.
    """
    index = index_tree(tree)
    entry = index.get(replacement.id)
    if entry is None:
        logger.debug("Edit noop: replace_subtree node_not_found node=%s", replacement.id)
        return tree

    is_top = entry.parent_id is None
    if is_top != (replacement.node_type == NodeType.ROOT):
        logger.debug(
            "Edit noop: replace_subtree variant_mismatch node=%s type=%s",
            replacement.id,
            replacement.node_type,
        )
        return tree
    if has_children(replacement) and _contains_root(replacement.children):  # type: ignore[union-attr]
        logger.debug("Edit noop: replace_subtree nested_root node=%s", replacement.id)
        return tree
    if nodes_equal(entry.node, replacement):
        return tree

    _check_new_ids(index, replacement, replaced_id=replacement.id)
    return _rebuild_path(index, replacement.id, replacement)


def add_child(tree: RootNode, parent_id: str, new_node: Node) -> RootNode:
    """Append ``new_node`` as the last child of ``parent_id``.

    No-op when the parent is absent or a DataNode, or when ``new_node`` is or
    contains a RootNode (a root never appears below another node).

    Raises:
        DuplicateIdError: If ``new_node``'s subtree shares an id with the tree.
    """
    index = index_tree(tree)
    entry = index.get(parent_id)
    if entry is None or not has_children(entry.node):
        logger.debug("Edit noop: add_child parent_not_container parent=%s", parent_id)
        return tree
    if _contains_root((new_node,)):
        logger.debug("Edit noop: add_child root_as_child parent=%s", parent_id)
        return tree

    _check_new_ids(index, new_node)
    parent = entry.node
    updated = dataclasses.replace(parent, children=(*parent.children, new_node))  # type: ignore[union-attr]
    return _rebuild_path(index, parent_id, updated)


def remove_child(tree: RootNode, parent_id: str, child_id: str) -> RootNode:
    """Remove the direct child ``child_id`` from ``parent_id``.

    No-op when the parent is absent or not a container, or when ``child_id``
    is not one of its direct children.
    """
    index = index_tree(tree)
    parent_entry = index.get(parent_id)
    child_entry = index.get(child_id)
    if (
        parent_entry is None
        or not has_children(parent_entry.node)
        or child_entry is None
        or child_entry.parent_id != parent_id
    ):
        logger.debug(
            "Edit noop: remove_child not_a_child parent=%s child=%s", parent_id, child_id
        )
        return tree

    parent = parent_entry.node
    children = parent.children  # type: ignore[union-attr]
    updated = dataclasses.replace(
        parent, children=children[: child_entry.position] + children[child_entry.position + 1 :]
    )
    return _rebuild_path(index, parent_id, updated)


def relocate(
    tree: RootNode,
    moved_id: str,
    target_id: str,
    placement: Placement | str,
) -> RootNode:
    """Move the subtree rooted at ``moved_id`` relative to ``target_id``.

    ``insert_before``/``insert_after`` make the moved node a sibling right
    before/after the target; ``adopt`` appends it as the target's last child.
    The moved node keeps its id and its subtree unchanged.

    No-op when either id is absent, the moved node is the root, the target is
    the moved node or lies inside the moved subtree, ``adopt`` targets a
    DataNode, or a sibling placement targets the root.

    Raises:
        ValueError: If ``placement`` is not a Placement value.
    """
    placement = Placement(placement)
    index = index_tree(tree)
    moved_entry = index.get(moved_id)
    target_entry = index.get(target_id)
    if moved_entry is None or target_entry is None:
        logger.debug(
            "Edit noop: relocate node_not_found moved=%s target=%s", moved_id, target_id
        )
        return tree
    if moved_entry.parent_id is None:
        logger.debug("Edit noop: relocate root_is_fixed moved=%s", moved_id)
        return tree
    if target_id in index.subtree_ids(moved_id):
        logger.debug(
            "Edit noop: relocate target_in_moved_subtree moved=%s target=%s",
            moved_id,
            target_id,
        )
        return tree
    if placement is Placement.ADOPT and not has_children(target_entry.node):
        logger.debug("Edit noop: relocate target_not_container target=%s", target_id)
        return tree
    if placement is not Placement.ADOPT and target_entry.parent_id is None:
        logger.debug("Edit noop: relocate root_has_no_siblings target=%s", target_id)
        return tree

    # Detach
    moved = moved_entry.node
    detached = remove_child(tree, moved_entry.parent_id, moved_id)
    detached_index = index_tree(detached)
    target_entry = _lookup(detached_index, target_id)

    # Reattach
    if placement is Placement.ADOPT:
        container_id = target_id
        position = len(target_entry.node.children)  # type: ignore[union-attr]
    else:
        if target_entry.parent_id is None:
            logger.debug("Edit noop: relocate root_has_no_siblings target=%s", target_id)
            return tree
        container_id = target_entry.parent_id
        position = target_entry.position
        if placement is Placement.INSERT_AFTER:
            position += 1
    container = _lookup(detached_index, container_id).node

    children = container.children  # type: ignore[union-attr]
    updated = dataclasses.replace(
        container, children=(*children[:position], moved, *children[position:])
    )
    result = _rebuild_path(detached_index, container_id, updated)
    if nodes_equal(result, tree):
        logger.debug(
            "Edit noop: relocate already_in_place moved=%s target=%s placement=%s",
            moved_id,
            target_id,
            placement,
        )
        return tree
    logger.debug(
        "Edit OK: relocate moved=%s target=%s placement=%s", moved_id, target_id, placement
    )
    return result
