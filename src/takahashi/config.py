# src/takahashi/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a usable default, so a bare checkout runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TAKAHASHI"

DEFAULT_TITLE_MAX_LENGTH = 30
DEFAULT_DEADLINE_FORMAT = "%Y/%m/%d %H:%M"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# A local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_path: Path

    # ---- Task store ----
    tasks_key: str

    # ---- Console front-end ----
    title_max_length: int
    deadline_format: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "takahashi").strip() or "takahashi"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/takahashi"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "store.sqlite3")

        tasks_key = _env(_k("TASKS_KEY"), "tasks").strip() or "tasks"

        title_max_length = _env_int(_k("TITLE_MAX_LENGTH"), DEFAULT_TITLE_MAX_LENGTH)
        if title_max_length <= 0:
            title_max_length = DEFAULT_TITLE_MAX_LENGTH
        deadline_format = _env(_k("DEADLINE_FORMAT"), DEFAULT_DEADLINE_FORMAT) or DEFAULT_DEADLINE_FORMAT

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_path=store_path,
            tasks_key=tasks_key,
            title_max_length=title_max_length,
            deadline_format=deadline_format,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
