"""Tests for calculate_stats."""

from __future__ import annotations

from json_tree_engine.tree.builder import from_json
from json_tree_engine.tree.nodes import NodeType, RootNode
from json_tree_engine.tree.stats import calculate_stats


class TestCalculateStats:
    def test_empty_root(self) -> None:
        stats = calculate_stats(RootNode())
        assert stats.total == 1
        assert stats.max_depth == 1
        assert stats.counts == {
            NodeType.ROOT: 1,
            NodeType.OBJECT: 0,
            NodeType.LIST: 0,
            NodeType.DATA: 0,
        }

    def test_mixed_document(self) -> None:
        stats = calculate_stats(from_json({"a": 1, "b": [True, None], "c": {"d": [[]]}}))
        assert stats.counts[NodeType.ROOT] == 1
        assert stats.counts[NodeType.OBJECT] == 1
        assert stats.counts[NodeType.LIST] == 3
        assert stats.counts[NodeType.DATA] == 3
        assert stats.total == 8
        # root(1) -> c(2) -> d(3) -> [](4)
        assert stats.max_depth == 4

    def test_all_node_types_present(self) -> None:
        stats = calculate_stats(from_json([1]))
        assert set(stats.counts) == set(NodeType)
