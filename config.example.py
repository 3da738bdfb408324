# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
read with python-dotenv). Nothing here is imported by the application.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TAKAHASHI_APP_NAME": "App display name (default: takahashi).",
    "TAKAHASHI_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TAKAHASHI_DATA_DIR": "Local data + log directory (default: .local/takahashi).",
    "TAKAHASHI_STORE_PATH": "Key-value SQLite path (default: <data_dir>/store.sqlite3).",
    # Task store
    "TAKAHASHI_TASKS_KEY": "Persistence slot holding the task list (default: tasks).",
    # Console front-end
    "TAKAHASHI_TITLE_MAX_LENGTH": "Max characters kept from a typed title (default: 30).",
    "TAKAHASHI_DEADLINE_FORMAT": "strftime format for deadlines in /list (default: %Y/%m/%d %H:%M).",
}
