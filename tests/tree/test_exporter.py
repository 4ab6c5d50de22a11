"""Tests for to_json and the JSON <-> tree round-trip law."""

from __future__ import annotations

from typing import Any

import pytest

from json_tree_engine.errors import InvalidNameError
from json_tree_engine.tree.builder import from_json
from json_tree_engine.tree.exporter import to_json
from json_tree_engine.tree.nodes import DataNode, ListNode, ObjectNode, RootNode

ROUND_TRIP_CASES: list[Any] = [
    {},
    [],
    {"a": 1, "b": [True, None]},
    {"user": {"name": "John", "tags": ["x", "y"], "age": 30, "score": 1.5}},
    [1, "two", 3.0, False, None, {"k": []}, [[]]],
    {"nested": [[{"deep": [{"deeper": {}}]}]]},
    {"unicode": "héllo ☃", "empty": ""},
]


class TestScenarios:
    """Spot checks of the export shape."""

    def test_empty_root_exports_empty_object(self) -> None:
        assert to_json(from_json({})) == {}

    def test_scenario_b(self) -> None:
        assert to_json(from_json({"a": 1, "b": [True, None]})) == {"a": 1, "b": [True, None]}

    def test_list_root_exports_list(self) -> None:
        assert to_json(RootNode(as_list=True, children=(DataNode(value=1),))) == [1]

    def test_data_exports_primitive(self) -> None:
        assert to_json(DataNode(value=None)) is None
        assert to_json(DataNode(value="x")) == "x"

    def test_list_ignores_child_names(self) -> None:
        lst = ListNode(children=(DataNode(name="ignored", value=1), DataNode(value=2)))
        assert to_json(lst) == [1, 2]


class TestRoundTrip:
    """to_json(from_json(v)) == v for acyclic values without empty/duplicate keys."""

    @pytest.mark.parametrize("value", ROUND_TRIP_CASES)
    def test_round_trip(self, value: Any) -> None:
        assert to_json(from_json(value)) == value

    def test_key_order_survives(self) -> None:
        value = {"z": 1, "a": 2, "m": 3}
        assert list(to_json(from_json(value))) == ["z", "a", "m"]

    def test_bool_stays_bool(self) -> None:
        out = to_json(from_json({"t": True, "one": 1}))
        assert out["t"] is True
        assert type(out["one"]) is int


class TestNames:
    """Empty or missing names cannot be exported; duplicates are last-write-wins."""

    def test_empty_name_under_root_fails(self) -> None:
        tree = RootNode(children=(DataNode(name="", value=1),))
        with pytest.raises(InvalidNameError, match="empty key"):
            to_json(tree)

    def test_empty_name_under_nested_object_fails(self) -> None:
        tree = RootNode(
            children=(ObjectNode(name="o", children=(DataNode(name="", value=1),)),)
        )
        with pytest.raises(InvalidNameError):
            to_json(tree)

    def test_imported_empty_key_fails_on_export(self) -> None:
        with pytest.raises(InvalidNameError):
            to_json(from_json({"": 1}))

    def test_missing_name_under_object_fails(self) -> None:
        tree = RootNode(children=(DataNode(value=1),))
        with pytest.raises(InvalidNameError, match="unnamed"):
            to_json(tree)

    def test_empty_name_inside_list_is_fine(self) -> None:
        assert to_json(ListNode(children=(DataNode(name="", value=1),))) == [1]

    def test_duplicate_names_last_write_wins(self) -> None:
        tree = RootNode(
            children=(
                DataNode(name="a", value=1),
                DataNode(name="b", value=2),
                DataNode(name="a", value=3),
            )
        )
        assert to_json(tree) == {"a": 3, "b": 2}


class TestDeepTrees:
    """Export walks iteratively, so depth is not bounded by the recursion limit."""

    @staticmethod
    def _depth(value: Any) -> int:
        depth = 0
        while isinstance(value, list) and value:
            value = value[0]
            depth += 1
        return depth

    def test_thousand_level_round_trip(self) -> None:
        value: Any = "leaf"
        for _ in range(1000):
            value = [value]
        out = to_json(from_json(value))
        assert self._depth(out) == 1000

    def test_hand_built_chain(self) -> None:
        node: ListNode | DataNode = DataNode(value=7)
        for _ in range(2999):
            node = ListNode(children=(node,))
        top = ListNode(name="deep", children=(node,))
        out = to_json(RootNode(children=(top,)))
        assert list(out) == ["deep"]
        assert self._depth(out["deep"]) == 3000

    def test_deep_name_error_still_raised(self) -> None:
        node: ListNode | ObjectNode = ObjectNode(children=(DataNode(name="", value=1),))
        for _ in range(2000):
            node = ListNode(children=(node,))
        with pytest.raises(InvalidNameError, match="empty key"):
            to_json(RootNode(as_list=True, children=(node,)))
