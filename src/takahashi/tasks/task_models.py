# src/takahashi/tasks/task_models.py

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class TaskDecodeError(ValueError):
    """Persisted bytes are not a task list in the expected JSON schema."""


def new_id() -> str:
    return str(uuid.uuid4())


def _require(data: dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in data:
        raise TaskDecodeError(f"{where}: missing '{key}'")
    val = data[key]
    if not isinstance(val, kind):
        raise TaskDecodeError(f"{where}: '{key}' must be {kind.__name__}")
    return val


def _parse_id(raw: str, where: str) -> str:
    try:
        return str(uuid.UUID(raw))
    except ValueError as e:
        raise TaskDecodeError(f"{where}: id is not a UUID: {raw!r}") from e


@dataclass(frozen=True, slots=True)
class Subtask:
    title: str
    deadline: datetime | None = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "deadline": self.deadline.isoformat() if self.deadline is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Subtask:
        if not isinstance(data, dict):
            raise TaskDecodeError("subtask must be an object")
        sub_id = _parse_id(_require(data, "id", str, "subtask"), "subtask")
        title = _require(data, "title", str, "subtask")

        # Optional: a missing key reads the same as null.
        raw_deadline = data.get("deadline")
        deadline: datetime | None = None
        if raw_deadline is not None:
            if not isinstance(raw_deadline, str):
                raise TaskDecodeError("subtask: 'deadline' must be an ISO-8601 string or null")
            try:
                deadline = datetime.fromisoformat(raw_deadline)
            except ValueError as e:
                raise TaskDecodeError(f"subtask: bad deadline {raw_deadline!r}") from e

        return cls(id=sub_id, title=title, deadline=deadline)


@dataclass(slots=True)
class Task:
    """
    Top-level to-do item.

    `subtasks` keeps insertion order; it is the display order and the order
    positional commands refer to. Only TaskStore mutates it.
    """

    title: str
    subtasks: list[Subtask] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def find_subtask(self, subtask_id: str) -> Subtask | None:
        for sub in self.subtasks:
            if sub.id == subtask_id:
                return sub
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise TaskDecodeError("task must be an object")
        task_id = _parse_id(_require(data, "id", str, "task"), "task")
        title = _require(data, "title", str, "task")
        raw_subs = _require(data, "subtasks", list, "task")
        return cls(
            id=task_id,
            title=title,
            subtasks=[Subtask.from_dict(s) for s in raw_subs],
        )


def encode_tasks(tasks: list[Task] | tuple[Task, ...]) -> bytes:
    """Serialize the whole task list into the persisted JSON array."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False).encode("utf-8")


def decode_tasks(raw: bytes) -> list[Task]:
    """
    Parse a persisted blob back into tasks.

    Raises TaskDecodeError for anything that is not UTF-8 JSON matching the
    task schema (non-JSON, wrong top-level type, missing or mistyped fields).
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise TaskDecodeError(f"not a JSON document: {e}") from e

    if not isinstance(data, list):
        raise TaskDecodeError("top-level value must be an array of tasks")
    return [Task.from_dict(item) for item in data]
