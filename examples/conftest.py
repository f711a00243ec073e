"""Pytest configuration for the motif examples.

Each example directory holds an ``app.py`` that renders at import time
and exposes its result as ``output``. The ``example_app`` fixture runs
that file fresh for every test, so no render state leaks between tests.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


def _load_app(app_path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"motif_example_{app_path.parent.name}", app_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load example app from {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> ModuleType:
    """The ``app.py`` module beside the requesting test file."""
    return _load_app(Path(request.path).with_name("app.py"))
