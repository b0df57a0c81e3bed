"""Exceptions for task_tracker."""

from __future__ import annotations


class TaskTrackerError(RuntimeError):
    """Base exception for user-facing task tracker errors."""

    pass


class ValidationError(TaskTrackerError):
    """Raised when arguments are missing or invalid (bad id, empty description, unknown status)."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class TaskNotFoundError(TaskTrackerError):
    """Raised when no task carries the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class StorageError(TaskTrackerError):
    """Raised when the tasks file cannot be decoded or written."""

    pass
