"""Tree subpackage: node model, JSON conversion, indexing and statistics.

Re-exports the public API for the tree module:
- RootNode, ObjectNode, ListNode, DataNode: the four frozen node variants
- NodeType: StrEnum discriminant of the four variants
- TreeBuilder / from_json: JSON object or array -> RootNode
- to_json: node -> plain JSON value
- TreeIndex / index_tree: id-keyed lookup over a snapshot
- TreeStats / calculate_stats: node counts and depth
"""

from json_tree_engine.tree.builder import TreeBuilder, from_json
from json_tree_engine.tree.exporter import to_json
from json_tree_engine.tree.index import IndexEntry, TreeIndex, find_node, index_tree
from json_tree_engine.tree.nodes import (
    ContainerNode,
    DataNode,
    JsonScalar,
    ListNode,
    Node,
    NodeType,
    ObjectNode,
    RootNode,
    has_children,
    iter_nodes,
    new_data_node,
    new_id,
    nodes_equal,
)
from json_tree_engine.tree.stats import TreeStats, calculate_stats

__all__ = [
    "ContainerNode",
    "DataNode",
    "IndexEntry",
    "JsonScalar",
    "ListNode",
    "Node",
    "NodeType",
    "ObjectNode",
    "RootNode",
    "TreeBuilder",
    "TreeIndex",
    "TreeStats",
    "calculate_stats",
    "find_node",
    "from_json",
    "has_children",
    "index_tree",
    "iter_nodes",
    "new_data_node",
    "new_id",
    "nodes_equal",
    "to_json",
]
