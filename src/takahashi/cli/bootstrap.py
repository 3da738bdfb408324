# src/takahashi/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite key-value store into a TaskStore,
- loads the persisted task list exactly once.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.task_models import Subtask, Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def _report_inconsistency(task: Task, subtask: Subtask) -> None:
    # Operator-visible channel; the store itself has already logged the details.
    logger.error("Task data needs attention: task id=%s subtask id=%s", task.id, subtask.id)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(
        SqliteKeyValueStore(settings.store_path),
        key=settings.tasks_key,
        on_inconsistency=_report_inconsistency,
    )
    store.load()

    return AppState(settings=settings, task_store=store)


def shutdown(state: AppState) -> None:
    """Best-effort final snapshot (no exceptions should escape)."""
    try:
        state.task_store.save()
    except Exception:
        logger.exception("Final save failed.")
