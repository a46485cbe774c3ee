"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

FIXED_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone(timedelta(hours=13)))


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock returning a constant timestamp (2024-01-15 10:00:00 +1300)."""
    return lambda: FIXED_TIME


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Root with a.txt ("hi"), a .hidden file and sub/b.txt."""
    root = tmp_path / "r"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hi")
    (root / ".hidden").write_bytes(b"secret")
    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_bytes(b"bee")
    return root


@pytest.fixture
def empty_root(tmp_path: Path) -> Path:
    """Root directory with no entries."""
    root = tmp_path / "empty"
    root.mkdir()
    return root
