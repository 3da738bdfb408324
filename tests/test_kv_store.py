# tests/test_kv_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

from takahashi.storage.kv_store import SqliteKeyValueStore
from takahashi.tasks.task_models import Subtask, Task
from takahashi.tasks.task_store import TaskStore


def test_get_set_overwrite(tmp_path: Path) -> None:
    kv = SqliteKeyValueStore(tmp_path / "nested" / "store.sqlite3")

    assert kv.get("tasks") is None
    kv.set("tasks", b"[]")
    assert kv.get("tasks") == b"[]"

    kv.set("tasks", b'[{"x": 1}]')
    assert kv.get("tasks") == b'[{"x": 1}]'
    assert kv.count_keys() == 1


def test_values_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "store.sqlite3"
    SqliteKeyValueStore(db).set("tasks", "日本語".encode("utf-8"))

    assert SqliteKeyValueStore(db).get("tasks").decode("utf-8") == "日本語"


def test_text_rows_are_returned_as_bytes(tmp_path: Path) -> None:
    db = tmp_path / "store.sqlite3"
    kv = SqliteKeyValueStore(db)
    conn = sqlite3.connect(str(db))
    conn.execute("INSERT INTO kv(key, value, updated_at) VALUES ('tasks', '[]', 0)")
    conn.commit()
    conn.close()

    assert kv.get("tasks") == b"[]"


def test_task_store_round_trip_through_sqlite(tmp_path: Path) -> None:
    db = tmp_path / "store.sqlite3"
    store = TaskStore(SqliteKeyValueStore(db))
    task = store.add_task("Trip")
    store.add_subtask(task.id, "Book hotel")
    store.save()

    fresh = TaskStore(SqliteKeyValueStore(db))
    fresh.load()
    assert fresh.tasks == (Task(id=task.id, title="Trip", subtasks=list(task.subtasks)),)
    assert isinstance(fresh.tasks[0].subtasks[0], Subtask)


def test_task_store_tolerates_garbage_row(tmp_path: Path) -> None:
    db = tmp_path / "store.sqlite3"
    SqliteKeyValueStore(db).set("tasks", b"\x00garbage")

    store = TaskStore(SqliteKeyValueStore(db))
    store.load()
    assert store.tasks == ()
