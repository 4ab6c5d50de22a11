"""Node variants and NodeType StrEnum for the editable JSON tree.

Provides the four frozen node dataclasses shared by every other component:
RootNode, ObjectNode, ListNode and DataNode.  Each variant carries an explicit
``node_type`` discriminant so consumers can branch exhaustively without
duck-typed "has children" checks.

Nodes are immutable.  Edits produce new node values through
``dataclasses.replace``; ids are assigned once at construction and never
recomputed from content.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import ClassVar, TypeAlias, assert_never

__all__ = [
    "ContainerNode",
    "DataNode",
    "JsonScalar",
    "ListNode",
    "Node",
    "NodeType",
    "ObjectNode",
    "RootNode",
    "has_children",
    "iter_nodes",
    "new_data_node",
    "new_id",
    "nodes_equal",
]

JsonScalar: TypeAlias = str | int | float | bool | None


class NodeType(StrEnum):
    """Enumeration of the four node variants.

    StrEnum values are the lowercased member names:
    - ROOT   -> "root"   : the single top-level container of a tree
    - OBJECT -> "object" : JSON object {} below the root
    - LIST   -> "list"   : JSON array []
    - DATA   -> "data"   : a leaf value (string, number, bool, null)
    """

    ROOT = auto()
    OBJECT = auto()
    LIST = auto()
    DATA = auto()


def new_id() -> str:
    """Return a fresh globally unique node id."""
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True, kw_only=True)
class RootNode:
    """The single top-level node of a tree.

    Attributes:
        id:       Opaque unique identifier.
        name:     Optional label; None is distinct from "".
        children: Ordered child nodes.
        as_list:  True when the imported top-level value was an array, so
                  export reproduces a list instead of an object.
    """

    node_type: ClassVar[NodeType] = NodeType.ROOT

    id: str = field(default_factory=new_id)
    name: str | None = None
    children: tuple[Node, ...] = ()
    as_list: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectNode:
    """A JSON object below the root; children are keyed by their ``name``."""

    node_type: ClassVar[NodeType] = NodeType.OBJECT

    id: str = field(default_factory=new_id)
    name: str | None = None
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ListNode:
    """A JSON array; child order is semantic and child names are ignored on export."""

    node_type: ClassVar[NodeType] = NodeType.LIST

    id: str = field(default_factory=new_id)
    name: str | None = None
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class DataNode:
    """A leaf holding a raw JSON primitive (including None for null)."""

    node_type: ClassVar[NodeType] = NodeType.DATA

    id: str = field(default_factory=new_id)
    name: str | None = None
    value: JsonScalar = None


Node: TypeAlias = RootNode | ObjectNode | ListNode | DataNode
ContainerNode: TypeAlias = RootNode | ObjectNode | ListNode


def has_children(node: Node) -> bool:
    """Return True if ``node`` has a children slot (Root, Object or List).

    Raises:
        TypeError: If ``node`` is not one of the four node variants.
    """
    node_type = getattr(node, "node_type", None)
    if not isinstance(node_type, NodeType):
        raise TypeError(f"Not a tree node: {type(node)!r}")
    match node_type:
        case NodeType.ROOT | NodeType.OBJECT | NodeType.LIST:
            return True
        case NodeType.DATA:
            return False
        case _:
            assert_never(node_type)


def new_data_node(name: str | None = "new", value: JsonScalar = "") -> DataNode:
    """Synthesize the default child added by "add child" edits."""
    return DataNode(name=name, value=value)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in depth-first pre-order.

    Iterative, so arbitrarily deep trees never hit the recursion limit.
    """
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        if has_children(current):
            stack.extend(reversed(current.children))  # type: ignore[union-attr]


def nodes_equal(left: Node, right: Node) -> bool:
    """Structural equality of two subtrees, ids included.

    Unlike ``==`` this walks iteratively, short-circuits on shared subtrees
    and compares data values by type as well as value, so ``1`` and ``True``
    are different.
    """
    stack: list[tuple[Node, Node]] = [(left, right)]
    while stack:
        a, b = stack.pop()
        if a is b:
            continue
        if type(a) is not type(b) or a.id != b.id or a.name != b.name:
            return False
        if isinstance(a, DataNode):
            value_a, value_b = a.value, b.value  # type: ignore[union-attr]
            if type(value_a) is not type(value_b):
                return False
            if value_a is not value_b and value_a != value_b:
                return False
            continue
        if isinstance(a, RootNode) and a.as_list != b.as_list:  # type: ignore[union-attr]
            return False
        if len(a.children) != len(b.children):  # type: ignore[union-attr]
            return False
        stack.extend(zip(a.children, b.children, strict=True))  # type: ignore[union-attr]
    return True
