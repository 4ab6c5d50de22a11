"""Tree -> JSON value conversion (the inverse of TreeBuilder).

Root and Object nodes fold their children into a dict keyed by child name.
When two children share a name the later one silently overwrites the earlier
key (last-write-wins).  A child with an empty or missing name has no legal
export key and raises InvalidNameError.

List nodes (and a RootNode imported from an array) map children to a list in
order, ignoring names.  Data nodes yield their stored primitive unchanged.

The walk keeps open containers on an explicit stack, so export depth is
bounded only by memory.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, assert_never

from json_tree_engine.errors import InvalidNameError
from json_tree_engine.tree.nodes import Node, NodeType

__all__ = ["to_json"]


def to_json(node: Node) -> Any:
    """Convert ``node`` and its subtree into a plain JSON value.

    Raises:
        InvalidNameError: If a Root/Object child has an empty or missing name.
    """
    if node.node_type == NodeType.DATA:
        return node.value  # type: ignore[union-attr]

    result = _empty_container(node)
    stack: list[tuple[Node, Iterator[Node], dict[str, Any] | list[Any]]] = [
        (node, iter(node.children), result)  # type: ignore[union-attr]
    ]
    while stack:
        parent, children, target = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            continue

        if child.node_type == NodeType.DATA:
            value: Any = child.value  # type: ignore[union-attr]
        else:
            value = _empty_container(child)
            stack.append((child, iter(child.children), value))  # type: ignore[union-attr]

        if isinstance(target, list):
            target.append(value)
        else:
            target[_export_key(parent, child)] = value
    return result


def _empty_container(node: Node) -> dict[str, Any] | list[Any]:
    match node.node_type:
        case NodeType.ROOT:
            return [] if node.as_list else {}  # type: ignore[union-attr]
        case NodeType.OBJECT:
            return {}
        case NodeType.LIST:
            return []
        case NodeType.DATA:
            raise TypeError(f"Data node {node.id} has no children")
        case _:
            assert_never(node.node_type)


def _export_key(parent: Node, child: Node) -> str:
    if child.name is None:
        raise InvalidNameError(
            f"Cannot export unnamed {child.node_type} node {child.id} "
            f"as a member of {_label(parent)}"
        )
    if child.name == "":
        raise InvalidNameError(
            f"Cannot export empty key for {child.node_type} node {child.id} "
            f"in {_label(parent)}"
        )
    return child.name


def _label(node: Node) -> str:
    if node.name:
        return f"{node.node_type} {node.name!r}"
    return f"{node.node_type} node {node.id}"
