# src/takahashi/tasks/task_store.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.ports import InconsistencyHook, KeyValueStore
from .task_models import Subtask, Task, TaskDecodeError, decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "tasks"


class TaskStore:
    """
    In-memory task list persisted as one JSON snapshot in a key-value slot.

    Failure policy is "fail open": unreadable or corrupt data loads as an
    empty list, failed saves are logged and dropped, lookups that miss are
    no-ops, and validate() only reports.

    Persistence:
    - delete_subtask / delete_task save immediately
    - add_task / add_subtask do not; the caller saves after adding
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        key: str = DEFAULT_TASKS_KEY,
        on_inconsistency: InconsistencyHook | None = None,
    ) -> None:
        self._kv = kv
        self._key = key
        self._on_inconsistency = on_inconsistency
        self._tasks: list[Task] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the current list, for rendering."""
        return tuple(self._tasks)

    # ---- persistence ----

    def load(self) -> None:
        """Replace the in-memory list with the persisted snapshot (empty if none)."""
        self._tasks = []

        try:
            raw = self._kv.get(self._key)
        except Exception:
            logger.exception("Failed to read slot %r; starting empty.", self._key)
            return

        if raw is None:
            logger.debug("No stored tasks under %r.", self._key)
            return

        try:
            tasks = decode_tasks(raw)
        except TaskDecodeError as e:
            logger.warning("Ignoring undecodable tasks in slot %r: %s", self._key, e)
            return

        self._tasks = tasks
        logger.info("Loaded %d task(s) from slot %r.", len(tasks), self._key)
        self.validate()

    def save(self) -> None:
        """Overwrite the slot with the full list. Errors are logged, never raised."""
        try:
            payload = encode_tasks(self._tasks)
        except (TypeError, ValueError):
            logger.exception("Failed to encode tasks; keeping previous snapshot.")
            return

        try:
            self._kv.set(self._key, payload)
        except Exception:
            logger.exception("Failed to write slot %r; keeping previous snapshot.", self._key)
            return

        logger.debug("Saved %d task(s) to slot %r.", len(self._tasks), self._key)

    # ---- diagnostics ----

    def _is_reachable(self, subtask_id: str) -> bool:
        return any(t.find_subtask(subtask_id) is not None for t in self._tasks)

    def validate(self) -> int:
        """
        Check that every subtask can be found by scanning all tasks.

        Reports only: a failure is logged and passed to the inconsistency
        hook, and checking moves on to the next task. Returns the number of
        inconsistencies found.
        """
        problems = 0
        for task in list(self._tasks):
            for sub in list(task.subtasks):
                if self._is_reachable(sub.id):
                    continue
                problems += 1
                logger.warning(
                    "Inconsistency found: task %r and subtask %r are not properly related.",
                    task.title,
                    sub.title,
                )
                if self._on_inconsistency is not None:
                    try:
                        self._on_inconsistency(task, sub)
                    except Exception:
                        logger.exception("Inconsistency hook failed.")
                break
        return problems

    # ---- queries ----

    def find_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- mutations ----

    def add_task(self, title: str) -> Task:
        task = Task(title=title)
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        return task

    def add_subtask(
        self,
        task_id: str,
        title: str,
        deadline: datetime | None = None,
    ) -> Subtask | None:
        task = self.find_task(task_id)
        if task is None:
            logger.debug("add_subtask: no task id=%s", task_id)
            return None

        sub = Subtask(title=title, deadline=deadline)
        task.subtasks.append(sub)
        logger.debug("Subtask added id=%s task_id=%s deadline=%s", sub.id, task_id, deadline)
        return sub

    def delete_subtask(self, task_id: str, subtask_id: str) -> bool:
        """
        Remove one subtask; a task left without subtasks is removed as well.

        Unknown ids are a no-op (returns False, nothing saved).
        """
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("delete_subtask: no task id=%s", task_id)
            return False

        task = self._tasks[idx]
        sub_idx = next((i for i, s in enumerate(task.subtasks) if s.id == subtask_id), None)
        if sub_idx is None:
            logger.debug("delete_subtask: no subtask id=%s in task id=%s", subtask_id, task_id)
            return False

        del task.subtasks[sub_idx]
        if not task.subtasks:
            del self._tasks[idx]
            logger.info("Task %s removed with its last subtask.", task_id)

        self.save()
        return True

    def delete_task(self, index: int) -> bool:
        """Remove the task at list position `index` (0-based), then save."""
        if index < 0 or index >= len(self._tasks):
            logger.debug("delete_task: index %s out of range (len=%d)", index, len(self._tasks))
            return False

        task = self._tasks.pop(index)
        logger.info("Task %s deleted at position %d.", task.id, index)
        self.save()
        return True
