"""json-tree-engine - editable JSON trees with undo/redo history."""

from __future__ import annotations

from json_tree_engine.codec import (
    ExportArtifact,
    ValidationResult,
    export_document,
    export_text,
    import_text,
    validate_json,
)
from json_tree_engine.editor import TreeEditor
from json_tree_engine.errors import (
    CircularReferenceError,
    DuplicateIdError,
    InvalidInputError,
    InvalidNameError,
    ParseError,
    TreeEngineError,
    ValidationError,
)
from json_tree_engine.history import HistoryConfig, HistorySession
from json_tree_engine.mutator import (
    Placement,
    add_child,
    relocate,
    remove_child,
    replace_subtree,
    update_fields,
)
from json_tree_engine.tree import (
    DataNode,
    ListNode,
    Node,
    NodeType,
    ObjectNode,
    RootNode,
    TreeStats,
    calculate_stats,
    find_node,
    from_json,
    has_children,
    new_data_node,
    new_id,
    to_json,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "CircularReferenceError",
    "DataNode",
    "DuplicateIdError",
    "ExportArtifact",
    "HistoryConfig",
    "HistorySession",
    "InvalidInputError",
    "InvalidNameError",
    "ListNode",
    "Node",
    "NodeType",
    "ObjectNode",
    "ParseError",
    "Placement",
    "RootNode",
    "TreeEditor",
    "TreeEngineError",
    "TreeStats",
    "ValidationError",
    "ValidationResult",
    "add_child",
    "calculate_stats",
    "export_document",
    "export_text",
    "find_node",
    "from_json",
    "has_children",
    "import_text",
    "new_data_node",
    "new_id",
    "relocate",
    "remove_child",
    "replace_subtree",
    "to_json",
    "update_fields",
    "validate_json",
]
