"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Subtask) + JSON codec
- task_store.py: in-memory list, mutations, snapshot persistence, consistency check
"""
