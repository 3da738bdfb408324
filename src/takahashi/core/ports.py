# src/takahashi/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a KeyValueStore Protocol rather than on SQLite,
and the console front-end depends on TaskRepo rather than on TaskStore.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Subtask, Task

InconsistencyHook = Callable[["Task", "Subtask"], None]
# Called with (task, subtask) when validate() finds a subtask it cannot reach.


class KeyValueStore(Protocol):
    """Process-local named slots holding raw bytes."""

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...


class TaskRepo(Protocol):
    """What a presentation layer may call on the task store."""

    @property
    def key(self) -> str: ...
    @property
    def tasks(self) -> tuple[Task, ...]: ...

    def load(self) -> None: ...
    def save(self) -> None: ...
    def validate(self) -> int: ...
    def find_task(self, task_id: str) -> Task | None: ...
    def add_task(self, title: str) -> Task: ...
    def add_subtask(
            self,
            task_id: str,
            title: str,
            deadline: datetime | None = None,
    ) -> Subtask | None: ...
    def delete_subtask(self, task_id: str, subtask_id: str) -> bool: ...
    def delete_task(self, index: int) -> bool: ...
