# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskmate.core.state import AppState
from taskmate.tasks.task_list import TaskList
from taskmate.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskmate-test",
        log_level="WARNING",
        data_dir=tmp_path,
        log_dir=tmp_path,
        tasks_path=tmp_path / "data" / "tasks.txt",
        strict_load=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState with an empty list and a real file-backed store in tmp_path.

    The store is real because keeping the file in sync is part of what we test.
    """
    return AppState(settings=settings, store=store, tasks=TaskList())


@pytest.fixture()
def read_file(settings: SimpleNamespace):
    def _read() -> list[str]:
        path: Path = settings.tasks_path
        if not path.exists():
            return []
        return path.read_text("utf-8").splitlines()

    return _read
