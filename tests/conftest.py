"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from tman.core.settings import Settings
from tman.core.store import TrashStore
from tman.utils.formatting import apply_settings


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories at a temporary location for every test."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    return xdg


@pytest.fixture(autouse=True)
def default_display() -> None:
    """Reset display settings changed by CLI tests."""
    apply_settings(Settings())


@pytest.fixture
def trash_dir(tmp_path: Path) -> Path:
    """Trash root for a test, separate from the workspace."""
    return tmp_path / "trash"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory holding files to be trashed."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def store(trash_dir: Path) -> TrashStore:
    """TrashStore backed by a temporary trash directory."""
    return TrashStore(trash_dir=trash_dir)
