# src/takahashi/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..config import DEFAULT_DEADLINE_FORMAT, DEFAULT_TITLE_MAX_LENGTH
from ..core.state import AppState
from ..tasks.task_models import Task
from .render import format_deadline, render_tasks

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Leave the console (alias: /quit).")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----

def _clip_title(state: AppState, words: list[str]) -> str:
    limit = int(getattr(state.settings, "title_max_length", DEFAULT_TITLE_MAX_LENGTH))
    return " ".join(words).strip()[:limit]


def _deadline_format(state: AppState) -> str:
    return str(getattr(state.settings, "deadline_format", DEFAULT_DEADLINE_FORMAT))


def _position(raw: str, count: int) -> int | None:
    """1-based position as typed by the user -> 0-based index, or None."""
    try:
        pos = int(raw)
    except ValueError:
        return None
    if pos < 1 or pos > count:
        return None
    return pos - 1


def _task_at(state: AppState, raw: str) -> tuple[int, Task] | None:
    tasks = state.task_store.tasks
    idx = _position(raw, len(tasks))
    if idx is None:
        return None
    return idx, tasks[idx]


def _parse_deadline(raw: str) -> datetime | None:
    """'2026-10-20' or '2026-10-20T18:30' -> datetime; raises ValueError."""
    return datetime.fromisoformat(raw)


# ---- handlers ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state.task_store.tasks, _deadline_format(state))


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.tasks
    n_subs = sum(len(t.subtasks) for t in tasks)
    where = getattr(state.settings, "store_path", "?")
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)}\n"
        f"  Subtasks: {n_subs}\n"
        f"  Storage: {where} (slot {state.task_store.key!r})"
    )


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task <title>  -> add a new (empty) task
    """
    title = _clip_title(state, args)
    if not title:
        return "Usage: /task <title>"

    task = state.task_store.add_task(title)
    state.task_store.save()
    pos = len(state.task_store.tasks)
    return f"Added task {pos}. {task.title}. Add subtasks with /sub {pos} <title>."


def cmd_sub(state: AppState, args: list[str]) -> str:
    """
    /sub <task#> <title> [@YYYY-MM-DD[THH:MM]]  -> add a subtask to a task
    """
    usage = "Usage: /sub <task#> <title> [@YYYY-MM-DD[THH:MM]]"
    if len(args) < 2:
        return usage

    found = _task_at(state, args[0])
    if found is None:
        return f"No task at position {args[0]}. Use /list to see positions."
    _, task = found

    words = args[1:]
    deadline: datetime | None = None
    if words[-1].startswith("@"):
        try:
            deadline = _parse_deadline(words[-1][1:])
        except ValueError:
            return f"Bad deadline {words[-1]!r}. {usage}"
        words = words[:-1]

    title = _clip_title(state, words)
    if not title:
        return usage

    sub = state.task_store.add_subtask(task.id, title, deadline)
    if sub is None:
        return f"No task at position {args[0]}. Use /list to see positions."
    state.task_store.save()

    when = format_deadline(sub.deadline, _deadline_format(state))
    suffix = f" (due {when})" if when else ""
    return f"Added subtask to '{task.title}': {sub.title}{suffix}"


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done <task#> <sub#>  -> delete a subtask (its task goes too if it was the last one)
    """
    if len(args) != 2:
        return "Usage: /done <task#> <sub#>"

    found = _task_at(state, args[0])
    if found is None:
        return f"No task at position {args[0]}. Use /list to see positions."
    _, task = found

    sub_idx = _position(args[1], len(task.subtasks))
    if sub_idx is None:
        return f"No subtask at position {args[1]} in '{task.title}'."
    sub = task.subtasks[sub_idx]

    state.task_store.delete_subtask(task.id, sub.id)
    if state.task_store.find_task(task.id) is None:
        return f"Removed '{sub.title}'. '{task.title}' had no subtasks left and was removed."
    return f"Removed '{sub.title}' from '{task.title}'."


def cmd_rm_task(state: AppState, args: list[str]) -> str:
    """
    /rm-task <task#>      -> ask for confirmation
    /rm-task <task#> yes  -> delete the task and all its subtasks
    """
    if not args or len(args) > 2:
        return "Usage: /rm-task <task#> [yes]"

    found = _task_at(state, args[0])
    if found is None:
        return f"No task at position {args[0]}. Use /list to see positions."
    idx, task = found

    if len(args) < 2 or args[1].lower() not in ("yes", "y"):
        return (
            f"Delete '{task.title}' and its {len(task.subtasks)} subtask(s)? "
            f"Confirm with /rm-task {args[0]} yes"
        )

    logger.debug("Task delete confirmed pos=%s id=%s", args[0], task.id)
    state.task_store.delete_task(idx)
    return f"Deleted task '{task.title}'."


def cmd_check(state: AppState, args: list[str]) -> str:
    problems = state.task_store.validate()
    if problems:
        return f"Consistency check: {problems} problem(s) found, see the log."
    return "Consistency check: OK."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks and subtasks.", aliases=["ls"])
registry.register("task", cmd_task, help_text="Add a task: /task <title>.")
registry.register(
    "sub", cmd_sub, help_text="Add a subtask: /sub <task#> <title> [@YYYY-MM-DD[THH:MM]]."
)
registry.register(
    "done", cmd_done, help_text="Delete a subtask: /done <task#> <sub#>.", aliases=["rm-sub"]
)
registry.register("rm-task", cmd_rm_task, help_text="Delete a task: /rm-task <task#> [yes].")
registry.register("check", cmd_check, help_text="Run the data consistency check.")
registry.register("status", cmd_status, help_text="Show counts and storage location.")
