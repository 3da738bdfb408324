# tests/test_commands.py

from __future__ import annotations

from datetime import datetime

from takahashi.cli.commands import CommandRegistry, registry
from takahashi.tasks.task_store import TaskStore
from takahashi.storage.kv_store import SqliteKeyValueStore


def _reloaded(state) -> TaskStore:
    fresh = TaskStore(SqliteKeyValueStore(state.settings.store_path), key=state.settings.tasks_key)
    fresh.load()
    return fresh


def test_command_registry_routes_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["A2"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/a2") == "ok"
    assert called == [["x", "y"], []]
    assert "/a - a" in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    names = ("/list", "/task", "/sub", "/done", "/rm-task", "/check", "/status", "/exit", "/quit")
    for name in names:
        assert name in text


def test_task_adds_and_saves(state) -> None:
    reply = registry.handle(state, "/task Groceries")

    assert "Added task 1. Groceries" in (reply or "")
    assert [t.title for t in _reloaded(state).tasks] == ["Groceries"]


def test_task_title_is_clipped(state) -> None:
    state.settings.title_max_length = 5
    registry.handle(state, "/task abcdefghij")

    assert state.task_store.tasks[0].title == "abcde"


def test_task_requires_title(state) -> None:
    assert "Usage" in (registry.handle(state, "/task") or "")
    assert state.task_store.tasks == ()


def test_sub_with_and_without_deadline(state) -> None:
    registry.handle(state, "/task Groceries")

    reply = registry.handle(state, "/sub 1 Buy milk @2026-10-20T09:30")
    assert "due 2026/10/20 09:30" in (reply or "")
    registry.handle(state, "/sub 1 Buy eggs")

    (task,) = _reloaded(state).tasks
    assert [(s.title, s.deadline) for s in task.subtasks] == [
        ("Buy milk", datetime(2026, 10, 20, 9, 30)),
        ("Buy eggs", None),
    ]


def test_sub_rejects_bad_input(state) -> None:
    registry.handle(state, "/task T")

    assert "No task at position 2" in (registry.handle(state, "/sub 2 x") or "")
    assert "No task at position" in (registry.handle(state, "/sub zero x") or "")
    assert "Bad deadline" in (registry.handle(state, "/sub 1 x @tomorrow") or "")
    assert "Usage" in (registry.handle(state, "/sub 1") or "")
    assert "Usage" in (registry.handle(state, "/sub 1 @2026-10-20") or "")
    assert state.task_store.tasks[0].subtasks == []


def test_list_renders_positions_and_deadlines(state) -> None:
    assert "No tasks" in (registry.handle(state, "/list") or "")

    registry.handle(state, "/task Groceries")
    registry.handle(state, "/sub 1 Buy milk @2026-10-20")
    registry.handle(state, "/task Trip")

    text = registry.handle(state, "/ls") or ""
    assert text.splitlines() == [
        "1. Groceries",
        "   1) Buy milk  [2026/10/20 00:00]",
        "2. Trip",
        "   (no subtasks yet)",
    ]


def test_done_cascades_and_persists(state) -> None:
    registry.handle(state, "/task Groceries")
    registry.handle(state, "/sub 1 Buy milk")
    registry.handle(state, "/sub 1 Buy eggs")

    assert "Removed 'Buy milk' from 'Groceries'" in (registry.handle(state, "/done 1 1") or "")
    reply = registry.handle(state, "/rm-sub 1 1") or ""

    assert "was removed" in reply
    assert state.task_store.tasks == ()
    assert _reloaded(state).tasks == ()


def test_done_rejects_bad_positions(state) -> None:
    registry.handle(state, "/task T")
    registry.handle(state, "/sub 1 a")

    assert "No subtask at position 2" in (registry.handle(state, "/done 1 2") or "")
    assert "No task at position 3" in (registry.handle(state, "/done 3 1") or "")
    assert "Usage" in (registry.handle(state, "/done 1") or "")
    assert len(state.task_store.tasks[0].subtasks) == 1


def test_rm_task_asks_for_confirmation(state) -> None:
    for title in ("A", "B", "C"):
        registry.handle(state, f"/task {title}")

    prompt = registry.handle(state, "/rm-task 2") or ""
    assert "Confirm with /rm-task 2 yes" in prompt
    assert len(state.task_store.tasks) == 3

    assert "Deleted task 'B'" in (registry.handle(state, "/rm-task 2 yes") or "")
    assert [t.title for t in _reloaded(state).tasks] == ["A", "C"]


def test_check_and_status(state) -> None:
    registry.handle(state, "/task T")
    registry.handle(state, "/sub 1 a")

    assert registry.handle(state, "/check") == "Consistency check: OK."
    status = registry.handle(state, "/status") or ""
    assert "Tasks: 1" in status
    assert "Subtasks: 1" in status
    assert "'tasks'" in status
