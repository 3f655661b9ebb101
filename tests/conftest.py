"""Pytest configuration and fixtures for dockstart tests.

Makes the dockstart package importable without installation and provides
a fixture for writing startup config files.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src directory to path for development testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a startup config into tmp_path and return its path."""

    def _write(text: str, name: str = "startup.yml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path


    return _write
