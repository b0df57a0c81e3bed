# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from ..errors import StorageError, TaskNotFoundError, ValidationError
from .codec import load_tasks, save_tasks
from .task_models import Task, TaskStatus, format_timestamp, parse_timestamp, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


# ---- pure helpers ----


def generate_id(tasks: Iterable[Task]) -> int:
    """1 for an empty collection, otherwise max(id) + 1. Ids are never reused."""
    return max((t.id for t in tasks), default=0) + 1


def parse_task_id(raw: str | int | None) -> int:
    """Convert user-supplied text into a task id (positive integer)."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Task ID is required")
    if isinstance(raw, int) and not isinstance(raw, bool):
        task_id = raw
    else:
        text = str(raw).strip()
        if not text.isdecimal():
            raise ValidationError(f"Invalid task ID '{raw}'. Task IDs are positive integers")
        task_id = int(text)
    if task_id < 1:
        raise ValidationError(f"Invalid task ID '{raw}'. Task IDs are positive integers")
    return task_id


def find_by_id(tasks: Sequence[Task], raw_id: str | int | None) -> Task | None:
    """Linear search; returns None when no task carries the id."""
    task_id = parse_task_id(raw_id)
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def _clean_description(description: str | None) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("Task description is required")
    return text


class TaskStore:
    """
    In-memory task collection for one invocation, backed by a JSON file.

    Lifecycle:
    - load() reads the whole file
    - mutating methods change the in-memory list only
    - save() writes the whole list back

    Tasks are frozen; every mutation swaps in a new Task at the same position.
    """

    def __init__(self, path: str | Path = "tasks.json", *, clock: Clock | None = None) -> None:
        self._path = Path(path)
        self._clock: Clock = clock or utc_now
        self._tasks: list[Task] = []
        self.last_error: StorageError | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tasks(self) -> list[Task]:
        """A copy of the current collection, in insertion order."""
        return list(self._tasks)

    # ---- persistence ----

    def load(self) -> list[Task]:
        """Read the whole file. A read failure leaves an empty collection and sets last_error."""
        self.last_error = None
        self._tasks = load_tasks(self._path, on_error=self._record_error)
        return self.tasks

    def save(self) -> bool:
        self.last_error = None
        return save_tasks(self._path, self._tasks, on_error=self._record_error)

    def _record_error(self, error: StorageError) -> None:
        self.last_error = error

    # ---- low-level helpers ----

    def _now(self) -> str:
        return format_timestamp(self._clock())

    def _touch(self, previous: str) -> str:
        """New updatedAt value; never earlier than `previous`."""
        now = self._clock()
        try:
            if parse_timestamp(previous) > now:
                return previous
        except ValueError:
            pass
        return format_timestamp(now)

    def _index_of(self, raw_id: str | int | None) -> int:
        task_id = parse_task_id(raw_id)
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    # ---- public API ----

    def generate_id(self) -> int:
        return generate_id(self._tasks)

    def find_by_id(self, raw_id: str | int | None) -> Task | None:
        return find_by_id(self._tasks, raw_id)

    def get(self, raw_id: str | int | None) -> Task:
        return self._tasks[self._index_of(raw_id)]

    def add(self, description: str | None) -> Task:
        text = _clean_description(description)
        now = self._now()
        task = Task(
            id=self.generate_id(),
            description=text,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        return task

    def update(self, raw_id: str | int | None, description: str | None) -> Task:
        """Replace the description only; status and createdAt are kept."""
        task_id = parse_task_id(raw_id)
        text = _clean_description(description)
        idx = self._index_of(task_id)
        old = self._tasks[idx]
        task = replace(old, description=text, updated_at=self._touch(old.updated_at))
        self._tasks[idx] = task
        logger.debug("Task updated id=%s", task.id)
        return task

    def delete(self, raw_id: str | int | None) -> Task:
        idx = self._index_of(raw_id)
        task = self._tasks.pop(idx)
        logger.debug("Task deleted id=%s", task.id)
        return task

    def mark(self, raw_id: str | int | None, status: TaskStatus | str) -> Task:
        # Status is validated before the lookup.
        new_status = TaskStatus.parse(status)
        idx = self._index_of(raw_id)
        old = self._tasks[idx]
        task = replace(old, status=new_status, updated_at=self._touch(old.updated_at))
        self._tasks[idx] = task
        logger.debug("Task id=%s marked %s", task.id, new_status.value)
        return task

    def list_tasks(self, status: TaskStatus | str | None = None) -> list[Task]:
        """All tasks, or only those with `status`. An invalid filter raises ValidationError."""
        if status is None:
            return self.tasks
        wanted = TaskStatus.parse(status)
        return [t for t in self._tasks if t.status == wanted]
