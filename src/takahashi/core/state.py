# src/takahashi/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import TaskRepo


@dataclass
class AppState:
    """
    Everything the front-end needs, owned explicitly and passed around.

    `settings` is typed loosely so tests can pass a SimpleNamespace.
    """

    settings: Any
    task_store: TaskRepo
