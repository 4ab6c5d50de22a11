"""Summary statistics for a tree snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from json_tree_engine.tree.nodes import Node, NodeType, has_children

__all__ = ["TreeStats", "calculate_stats"]


@dataclass(frozen=True, slots=True)
class TreeStats:
    """Node totals for one tree.

    Attributes:
        total:     Number of nodes, the top node included.
        max_depth: Depth of the deepest node; the top node has depth 1.
        counts:    Number of nodes per NodeType; every member is present.
    """

    total: int
    max_depth: int
    counts: dict[NodeType, int]


def calculate_stats(node: Node) -> TreeStats:
    counts = dict.fromkeys(NodeType, 0)
    max_depth = 0
    stack: list[tuple[Node, int]] = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        counts[current.node_type] += 1
        max_depth = max(max_depth, depth)
        if has_children(current):
            stack.extend((child, depth + 1) for child in current.children)  # type: ignore[union-attr]
    return TreeStats(total=sum(counts.values()), max_depth=max_depth, counts=counts)
