"""Integration tests for the public API surface.

All imports are from the top-level ``json_tree_engine`` package, never from
internal submodules.  Walks a document through import, edits, history and
export the way an editor front end would.
"""

from __future__ import annotations

import json

import pytest

from json_tree_engine import (
    DataNode,
    HistoryConfig,
    HistorySession,
    ObjectNode,
    Placement,
    RootNode,
    TreeEditor,
    TreeEngineError,
    add_child,
    export_text,
    find_node,
    from_json,
    import_text,
    relocate,
    remove_child,
    to_json,
    update_fields,
)


class TestConvertAndEdit:
    """Pure functions compose without touching their inputs."""

    def test_round_trip(self) -> None:
        doc = {"a": 1, "b": [True, None, {"c": "x"}], "d": {}}
        assert to_json(from_json(doc)) == doc

    def test_edit_chain(self) -> None:
        tree = from_json({"a": 1, "b": []})
        a_id, b_id = (child.id for child in tree.children)

        t1 = update_fields(tree, a_id, {"value": 2})
        t2 = add_child(t1, b_id, DataNode(value="new"))
        t3 = relocate(t2, a_id, b_id, Placement.ADOPT)
        t4 = remove_child(t3, tree.id, b_id)

        assert to_json(tree) == {"a": 1, "b": []}
        assert to_json(t1) == {"a": 2, "b": []}
        assert to_json(t2) == {"a": 2, "b": ["new"]}
        assert to_json(t3) == {"b": ["new", 2]}
        assert to_json(t4) == {}

    def test_untouched_subtrees_are_shared(self) -> None:
        tree = from_json({"left": {"x": 1}, "right": {"y": 2}})
        left, right = tree.children
        y_id = right.children[0].id  # type: ignore[union-attr]

        updated = update_fields(tree, y_id, {"value": 3})

        assert updated.children[0] is left
        assert updated.children[1] is not right
        assert find_node(updated, y_id).value == 3  # type: ignore[union-attr]

    def test_ids_survive_relocation(self) -> None:
        tree = RootNode(
            id="r",
            children=(
                ObjectNode(id="o", name="o"),
                DataNode(id="d", name="d", value=1),
            ),
        )
        moved = relocate(tree, "d", "o", "adopt")
        node = find_node(moved, "d")
        assert node is not None
        assert node == tree.children[1]


class TestTextSurface:
    def test_import_export(self) -> None:
        text = export_text(import_text('{"k": [1, 2]}'))
        assert json.loads(text) == {"k": [1, 2]}

    def test_errors_share_base(self) -> None:
        with pytest.raises(TreeEngineError):
            import_text("{]")


class TestEditorSession:
    """TreeEditor wires the mutator to a HistorySession."""

    def test_full_session(self) -> None:
        with TreeEditor(config=HistoryConfig(coalesce_window=None)) as editor:
            editor.import_text('{"title": "draft"}')
            editor.flush()
            title_id = editor.tree.children[0].id

            editor.update_fields(title_id, {"value": "final"})
            editor.add_child(editor.tree.id)
            editor.flush()
            assert editor.to_json() == {"title": "final", "new": ""}

            assert editor.undo()
            assert editor.to_json() == {"title": "draft"}
            assert editor.undo()
            assert editor.to_json() == {}
            assert not editor.undo()

            assert editor.redo()
            assert editor.redo()
            assert editor.to_json() == {"title": "final", "new": ""}

    def test_session_is_exported(self) -> None:
        assert isinstance(TreeEditor().session, HistorySession)
