# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from takahashi.core.state import AppState
from takahashi.storage.kv_store import SqliteKeyValueStore
from takahashi.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="takahashi-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "store.sqlite3",
        tasks_key="tasks",
        title_max_length=30,
        deadline_format="%Y/%m/%d %H:%M",
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore) -> TaskStore:
    return TaskStore(kv)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real SQLite key-value store under tmp_path.

    Persistence is part of what the command tests check.
    """
    task_store = TaskStore(SqliteKeyValueStore(settings.store_path), key=settings.tasks_key)
    task_store.load()
    return AppState(settings=settings, task_store=task_store)
