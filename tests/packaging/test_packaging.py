"""Packaging correctness verification for json-tree-engine.

Tests validate:
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("py.typed") for n in names), (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_all_source_modules_in_wheel(self, wheel_path: Path) -> None:
        expected_modules = [
            "json_tree_engine/__init__.py",
            "json_tree_engine/codec.py",
            "json_tree_engine/editor.py",
            "json_tree_engine/errors.py",
            "json_tree_engine/mutator.py",
            "json_tree_engine/history/__init__.py",
            "json_tree_engine/history/config.py",
            "json_tree_engine/history/session.py",
            "json_tree_engine/tree/__init__.py",
            "json_tree_engine/tree/builder.py",
            "json_tree_engine/tree/exporter.py",
            "json_tree_engine/tree/index.py",
            "json_tree_engine/tree/nodes.py",
            "json_tree_engine/tree/stats.py",
            "json_tree_engine/integrations/__init__.py",
            "json_tree_engine/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), f"Module {module} not found in wheel"

    def test_no_pycache_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self) -> None:
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        ours = [ep for ep in pytest11_eps if "json_tree_engine" in str(ep.value)]
        assert ours, (
            f"No pytest11 entry point found for json-tree-engine. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self) -> None:
        import importlib

        mod = importlib.import_module("json_tree_engine.integrations._pytest_plugin")
        assert callable(mod.assert_round_trip)


class TestPackageMetadata:
    def test_version(self) -> None:
        import json_tree_engine

        assert json_tree_engine.__version__ == "0.1.0"

    def test_installed_metadata(self) -> None:
        from importlib.metadata import version

        assert version("json-tree-engine") == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        import json_tree_engine

        missing = [name for name in json_tree_engine.__all__ if not hasattr(json_tree_engine, name)]
        assert not missing, f"__all__ names not defined: {missing}"

    def test_core_exports(self) -> None:
        import json_tree_engine

        expected = {
            "RootNode",
            "from_json",
            "to_json",
            "update_fields",
            "add_child",
            "remove_child",
            "relocate",
            "HistorySession",
            "TreeEditor",
            "TreeEngineError",
        }
        assert expected <= set(json_tree_engine.__all__)
