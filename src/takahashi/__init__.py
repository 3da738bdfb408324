"""Personal task tracker: tasks with deadline-bearing subtasks, stored locally."""

__version__ = "0.1.0"
