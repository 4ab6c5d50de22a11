"""TreeBuilder: converts a JSON object or array into an editable node tree.

Walks the value with an explicit stack of open containers, converting dicts,
lists and scalar values into ObjectNode, ListNode and DataNode values under a
single RootNode.  Object keys become child names in encounter order; list
elements stay unnamed.  Nesting depth is bounded only by memory.

Cycle detection tracks the ``id()`` of every container that is currently open
on the stack.  A container met again while it is still open raises
CircularReferenceError; the same container reached twice along separate
branches is simply converted twice, each copy with fresh ids.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from json_tree_engine.errors import CircularReferenceError, InvalidInputError
from json_tree_engine.tree.nodes import DataNode, ListNode, Node, ObjectNode, RootNode

__all__ = ["TreeBuilder", "from_json"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


@dataclass(slots=True)
class _OpenContainer:
    """A dict or list whose members are still being converted."""

    value: dict[str, Any] | list[Any]
    name: str | None
    members: Iterator[tuple[str | None, Any]]
    children: list[Node] = field(default_factory=list)


def _members(container: dict[str, Any] | list[Any]) -> Iterator[tuple[str | None, Any]]:
    if isinstance(container, list):
        for item in container:
            yield None, item
        return
    for key, val in container.items():
        if not isinstance(key, str):
            raise InvalidInputError(
                f"Object keys must be strings, got {type(key).__name__} {key!r}"
            )
        yield key, val


@dataclass
class TreeBuilder:
    """Converts a JSON object or array into a RootNode tree.

    DataNode stores the raw primitive, so bool needs no special casing
    against int here; the original Python type survives the conversion.

    Example::
        tree = TreeBuilder().build({"a": 1, "b": [True, None]})
        # RootNode -> [DataNode(name="a", value=1),
        #              ListNode(name="b") -> [DataNode(True), DataNode(None)]]
    """

    _visiting: set[int] = field(default_factory=set, init=False, repr=False)

    def build(self, value: JsonValue) -> RootNode:
        """Convert a top-level JSON object or array into a RootNode.

        Args:
            value: A dict or list.  Scalars and None are rejected.

        Returns:
            A RootNode whose children mirror the value's members.  A list at
            the top yields ``RootNode(as_list=True)``.

        Raises:
            InvalidInputError: If ``value`` is not a dict or list, or holds a
                non-string key or a non-JSON value anywhere.
            CircularReferenceError: If a container is reachable from itself.
        """
        if not isinstance(value, dict | list):
            raise InvalidInputError(
                f"Top-level JSON value must be an object or array, got {_describe(value)}"
            )
        self._visiting.clear()
        try:
            return self._walk(value)
        finally:
            self._visiting.clear()

    def _walk(self, top: dict[str, Any] | list[Any]) -> RootNode:
        stack = [self._open(top, None)]
        while True:
            current = stack[-1]
            member = next(current.members, None)
            if member is not None:
                name, item = member
                if isinstance(item, dict | list):
                    stack.append(self._open(item, name))
                else:
                    current.children.append(_build_leaf(item, name))
                continue

            stack.pop()
            self._visiting.discard(id(current.value))
            children = tuple(current.children)
            if not stack:
                return RootNode(children=children, as_list=isinstance(current.value, list))
            if isinstance(current.value, dict):
                node: Node = ObjectNode(name=current.name, children=children)
            else:
                node = ListNode(name=current.name, children=children)
            stack[-1].children.append(node)

    def _open(self, container: dict[str, Any] | list[Any], name: str | None) -> _OpenContainer:
        marker = id(container)
        if marker in self._visiting:
            raise CircularReferenceError(
                f"Circular reference detected at {type(container).__name__} "
                f"with {len(container)} member(s)"
            )
        self._visiting.add(marker)
        return _OpenContainer(container, name, _members(container))


def _build_leaf(value: Any, name: str | None) -> DataNode:
    if value is None or isinstance(value, bool | str | int | float):
        return DataNode(name=name, value=value)
    raise InvalidInputError(f"Unsupported JSON value type: {type(value)!r}")


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def from_json(value: JsonValue) -> RootNode:
    """Convert a JSON object or array into a RootNode tree.

    Creates a fresh TreeBuilder per call so no state leaks between imports.
    """
    return TreeBuilder().build(value)
