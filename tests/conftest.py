"""Pytest configuration. Ensures project root is in sys.path for top-level modules (gofmt_import_cli, cli)."""
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(scope="session", autouse=True)
def _add_project_root_to_path():
    root = Path(__file__).resolve().parent.parent
    import sys
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture
def golden_dir() -> Path:
    return FIXTURES / "golden"
