"""Import and export surfaces: JSON text <-> tree.

``import_text`` parses raw text and converts it with ``from_json``.
``export_text`` converts a tree with ``to_json`` and renders the result as
pretty-printed strict JSON, with the same layout as ``json.dumps(indent=2)``
but without a nesting limit.  Both are all-or-nothing: on failure they raise
a TreeEngineError with a human-readable message and produce nothing.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from json_tree_engine.errors import InvalidInputError, ParseError, ValidationError
from json_tree_engine.tree.builder import from_json
from json_tree_engine.tree.exporter import to_json
from json_tree_engine.tree.nodes import Node, RootNode

__all__ = [
    "EXPORT_FILENAME",
    "EXPORT_INDENT",
    "EXPORT_MEDIA_TYPE",
    "ExportArtifact",
    "ValidationResult",
    "export_document",
    "export_text",
    "import_text",
    "validate_json",
]

EXPORT_INDENT = 2
EXPORT_FILENAME = "tree.json"
EXPORT_MEDIA_TYPE = "application/json"

_INDENT = " " * EXPORT_INDENT


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of the export validity check.

    Attributes:
        ok:    True when the value serializes as strict JSON.
        error: The serializer's message when ``ok`` is False, else None.
    """

    ok: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    """A ready-to-save export.

    Attributes:
        filename:   Suggested file name.
        media_type: MIME type of ``data``.
        data:       UTF-8 encoded JSON text.
    """

    filename: str
    media_type: str
    data: bytes


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Invalid JSON literal: {name}")


def import_text(text: str | bytes) -> RootNode:
    """Parse JSON text into a new tree.

    Raises:
        ParseError: If ``text`` is not well-formed JSON (NaN/Infinity included).
            Carries the parser's line, column and offset when known.
        InvalidInputError: If the top-level value is not an object or array,
            or the document nests deeper than the JSON parser accepts.
    """
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc), lineno=exc.lineno, colno=exc.colno, pos=exc.pos) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Input is not valid UTF-8 text: {exc.reason}") from exc
    except RecursionError as exc:
        raise InvalidInputError("JSON document is nested too deeply") from exc
    return from_json(value)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, int):
        return int.__repr__(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"Out of range float values are not JSON compliant: {value!r}"
            raise ValueError(msg)
        return float.__repr__(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _render(value: Any) -> str:
    """Render ``value`` the way ``json.dumps(indent=2, ensure_ascii=False)`` does.

    Open containers sit on an explicit stack, so nesting depth is bounded
    only by memory.  Only str keys are accepted since other keys would not
    survive a round trip.

    Raises:
        TypeError: For values (or keys) that have no strict JSON form.
        ValueError: For NaN and infinite floats.
    """
    chunks: list[str] = []
    stack: list[tuple[Iterator[tuple[int, tuple[Any, Any]]], int, str]] = []

    def open_value(item: Any, depth: int) -> None:
        if isinstance(item, dict):
            if not item:
                chunks.append("{}")
                return
            chunks.append("{")
            stack.append((enumerate(item.items()), depth, "}"))
        elif isinstance(item, list):
            if not item:
                chunks.append("[]")
                return
            chunks.append("[")
            stack.append((enumerate((None, element) for element in item), depth, "]"))
        else:
            chunks.append(_render_scalar(item))

    open_value(value, 0)
    while stack:
        members, depth, closer = stack[-1]
        member = next(members, None)
        if member is None:
            stack.pop()
            chunks.append("\n" + _INDENT * depth + closer)
            continue

        position, (key, item) = member
        if position:
            chunks.append(",")
        chunks.append("\n" + _INDENT * (depth + 1))
        if closer == "}":
            if not isinstance(key, str):
                msg = f"Keys must be str, got {type(key).__name__} {key!r}"
                raise TypeError(msg)
            chunks.append(json.dumps(key, ensure_ascii=False) + ": ")
        open_value(item, depth + 1)
    return "".join(chunks)


def validate_json(value: Any) -> ValidationResult:
    """Check that ``value`` is strict JSON: str keys, finite numbers, JSON types only."""
    try:
        _render(value)
    except (TypeError, ValueError) as exc:
        return ValidationResult(ok=False, error=str(exc))
    return ValidationResult(ok=True)


def export_text(tree: Node) -> str:
    """Render ``tree`` as pretty-printed JSON text (2-space indent).

    Raises:
        InvalidNameError: If an object member has an empty or missing name.
        ValidationError: If the exported value is not serializable as strict
            JSON (e.g. a NaN data value).
    """
    value = to_json(tree)
    try:
        return _render(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Export failed: {exc}") from exc


def export_document(tree: Node) -> ExportArtifact:
    """Render ``tree`` as a UTF-8 JSON artifact ready to be saved."""
    return ExportArtifact(
        filename=EXPORT_FILENAME,
        media_type=EXPORT_MEDIA_TYPE,
        data=export_text(tree).encode("utf-8"),
    )
