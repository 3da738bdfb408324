# src/takahashi/cli/render.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..config import DEFAULT_DEADLINE_FORMAT
from ..tasks.task_models import Subtask, Task


def format_deadline(deadline: datetime | None, fmt: str = DEFAULT_DEADLINE_FORMAT) -> str:
    if deadline is None:
        return ""
    return deadline.strftime(fmt)


def render_subtask(pos: int, sub: Subtask, fmt: str = DEFAULT_DEADLINE_FORMAT) -> str:
    line = f"   {pos}) {sub.title}"
    if sub.deadline is not None:
        line += f"  [{format_deadline(sub.deadline, fmt)}]"
    return line


def render_tasks(tasks: Iterable[Task], fmt: str = DEFAULT_DEADLINE_FORMAT) -> str:
    """
    Numbered task sections with their subtasks underneath:

        1. Groceries
           1) Buy milk  [2026/10/20 09:00]
    """
    lines: list[str] = []
    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i}. {task.title}")
        if not task.subtasks:
            lines.append("   (no subtasks yet)")
        for j, sub in enumerate(task.subtasks, start=1):
            lines.append(render_subtask(j, sub, fmt))
    if not lines:
        return "No tasks. Add one with /task <title>."
    return "\n".join(lines)
