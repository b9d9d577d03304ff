"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tally_cli.config import Config  # noqa: E402
from tally_cli.errors import StorageError  # noqa: E402
from tally_cli.storage import TaskStorage  # noqa: E402
from tally_cli.task_list import TaskList  # noqa: E402


class RecordingStorage:
    """In-memory stand-in for TaskStorage that remembers every save."""

    def __init__(self, tasks=None):
        self.tasks = list(tasks or [])
        self.saves = []

    def load(self):
        return list(self.tasks)

    def save(self, tasks):
        self.tasks = list(tasks)
        self.saves.append(list(tasks))


class FailingStorage(RecordingStorage):
    """Storage whose saves always fail."""

    def save(self, tasks):
        raise StorageError("disk full")


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def task_list():
    return TaskList()


@pytest.fixture
def file_storage(tmp_path):
    return TaskStorage(tmp_path / "tasks.md")


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point configuration at a temporary directory."""
    monkeypatch.setenv("TALLY_DATA_DIR", str(tmp_path))
    Config.reset()
    yield tmp_path
    Config.reset()
