"""pytest plugin for json-tree-engine.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_tree_engine import from_json, to_json


@pytest.fixture(scope="session")
def assert_round_trip() -> Any:
    """Fixture that returns a callable JSON <-> tree round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless
    (each call builds a fresh tree with from_json).

    Usage in tests::

        def test_document_survives_editor(assert_round_trip):
            assert_round_trip({"a": 1, "b": [True, None]})

        def test_duplicate_keys_collapse(assert_round_trip):
            assert_round_trip(payload, expected={"a": 2})

    Returns:
        A callable ``_assert(value, expected=None) -> RootNode`` that converts
        ``value`` to a tree and back, raises ``AssertionError`` when the result
        differs from ``expected`` (``value`` itself by default) and returns the
        intermediate tree for further inspection.
    """

    def _assert(value: Any, expected: Any = None) -> Any:
        """Assert that ``value`` survives a from_json/to_json round trip.

        Args:
            value:    A JSON object or array.
            expected: The value the round trip must produce.  Defaults to
                      ``value``.

        Raises:
            AssertionError: When the exported value differs, with a message
            including both values.
        """
        target = value if expected is None else expected
        tree = from_json(value)
        actual = to_json(tree)
        if actual != target:
            raise AssertionError(
                f"JSON value does not round-trip through the tree:\n"
                f"  expected: {target}\n"
                f"  actual:   {actual}"
            )
        return tree

    return _assert
