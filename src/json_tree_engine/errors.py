"""Exception taxonomy for json-tree-engine.

Every error raised by the engine derives from ``TreeEngineError`` so callers
can surface a single human-readable message for any failed import, export or
identity breach.  Mutator no-ops (missing ids, inapplicable variants, illegal
relocation targets) are *not* represented here; they return the
original tree instead of raising.
"""

from __future__ import annotations

__all__ = [
    "CircularReferenceError",
    "DuplicateIdError",
    "InvalidInputError",
    "InvalidNameError",
    "ParseError",
    "TreeEngineError",
    "ValidationError",
]


class TreeEngineError(Exception):
    """Base class for all json-tree-engine errors."""


class InvalidInputError(TreeEngineError, ValueError):
    """Top-level import value is not a JSON object or array, or holds non-JSON data."""


class CircularReferenceError(TreeEngineError):
    """The input value graph contains a container reachable from itself."""


class InvalidNameError(TreeEngineError):
    """An object child cannot be exported because it has no usable key."""


class DuplicateIdError(TreeEngineError):
    """Two nodes in one tree share an id.

    Attributes:
        node_id: The id that occurs more than once.
    """

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Duplicate node id in tree: {node_id!r}")
        self.node_id = node_id


class ParseError(TreeEngineError, ValueError):
    """Malformed JSON text at the import boundary.

    Attributes:
        lineno: 1-based line of the failure, or None when unknown.
        colno:  1-based column of the failure, or None when unknown.
        pos:    0-based character offset of the failure, or None when unknown.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        colno: int | None = None,
        pos: int | None = None,
    ) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


class ValidationError(TreeEngineError):
    """Exported JSON value failed the serializer round-trip check."""
