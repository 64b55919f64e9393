"""Pytest configuration for offcycle examples.

Each example directory holds an ``app.py`` that renders at import time and a
test module checking its module-level results. ``example_app`` executes that
``app.py`` under a fresh module name per test, so controller classes (and the
view renderers cached on them) never leak between tests.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


def _load_app(app_path: Path, module_name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load example app from {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> ModuleType:
    """Execute the sibling app.py and return its module."""
    app_path = Path(request.path).parent / "app.py"
    return _load_app(app_path, f"offcycle_example_{app_path.parent.name}")
