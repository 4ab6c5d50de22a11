"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 100-node flat, ~1k-node nested, ~10k-node deeply nested.
"""

from __future__ import annotations

from typing import Any

import pytest

from json_tree_engine import RootNode, from_json


def generate_flat_object(num_keys: int, prefix: str = "key") -> dict[str, Any]:
    """Generate a flat dict with deterministic string values."""
    return {f"{prefix}_{i}": f"value_{i}" for i in range(num_keys)}


def _make_nested_1k() -> dict[str, Any]:
    """10 sections x 10 records x 9 fields, plus a list per record."""
    doc: dict[str, Any] = {}
    for i in range(10):
        section: dict[str, Any] = {}
        for j in range(10):
            record: dict[str, Any] = {f"field_{k}": f"v_{i}_{j}_{k}" for k in range(8)}
            record["tags"] = [i, j]
            section[f"record_{j}"] = record
        doc[f"section_{i}"] = section
    return doc


def _make_nested_10k() -> dict[str, Any]:
    """10 sections x 10 groups x 10 records x ~10 leaves across four levels."""
    doc: dict[str, Any] = {}
    for i in range(10):
        section: dict[str, Any] = {}
        for j in range(10):
            group: dict[str, Any] = {}
            for k in range(10):
                group[f"record_{k}"] = {
                    "id": i * 100 + j * 10 + k,
                    "active": k % 2 == 0,
                    "score": k / 10,
                    "note": None,
                    "values": list(range(5)),
                }
            section[f"group_{j}"] = group
        doc[f"section_{i}"] = section
    return doc


# --- Fixtures for each size tier ---


@pytest.fixture
def doc_100() -> dict[str, Any]:
    return generate_flat_object(100)


@pytest.fixture
def doc_1k() -> dict[str, Any]:
    return _make_nested_1k()


@pytest.fixture
def doc_10k() -> dict[str, Any]:
    return _make_nested_10k()


@pytest.fixture
def tree_10k(doc_10k: dict[str, Any]) -> RootNode:
    return from_json(doc_10k)
