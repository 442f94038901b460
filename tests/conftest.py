# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.manager import TaskManager
from tasktrack.schema import TaskTrackerConfig

from .fakes import MemoryBlobStore


@pytest.fixture()
def config(tmp_path: Path) -> TaskTrackerConfig:
    """Config pointing at a per-test data file."""
    return TaskTrackerConfig(data_file=tmp_path / "tasks.json")


@pytest.fixture()
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def manager(store: MemoryBlobStore) -> TaskManager:
    """Manager over an empty in-memory store."""
    return TaskManager(store=store)
