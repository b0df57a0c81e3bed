"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and timestamp helpers
- codec.py: JSON encoding/decoding and whole-file load/save
- task_store.py: in-memory collection with id assignment and mutations
"""
