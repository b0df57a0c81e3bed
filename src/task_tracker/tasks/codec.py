# src/task_tracker/tasks/codec.py

"""
JSON codec for the tasks file.

The file is a single JSON array of task objects. Reads are forgiving (a missing
or corrupt file yields an empty collection); writes replace the whole file via
a temporary sibling and os.replace, so the old content is either fully replaced
or left untouched.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from ..errors import StorageError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

JSON_INDENT = 2

ErrorCallback = Callable[[StorageError], None]


def decode_tasks(raw: str) -> list[Task]:
    """Parse file content into tasks. Raises StorageError on malformed content."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageError(f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorageError(f"expected a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[int] = set()
    for i, item in enumerate(data):
        try:
            task = Task.from_dict(item)
        except ValueError as e:
            raise StorageError(f"record #{i}: {e}") from e
        if task.id in seen:
            raise StorageError(f"record #{i}: duplicate task id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks with stable field order and 2-space indentation."""
    records = []
    seen: set[int] = set()
    for task in tasks:
        if task.status not in TaskStatus.values():
            raise StorageError(f"task {task.id}: refusing to persist status {task.status!r}")
        if task.id in seen:
            raise StorageError(f"refusing to persist duplicate task id {task.id}")
        seen.add(task.id)
        records.append(task.to_dict())
    return json.dumps(records, ensure_ascii=False, indent=JSON_INDENT) + "\n"


def load_tasks(path: str | Path, *, on_error: ErrorCallback | None = None) -> list[Task]:
    """
    Load every task from `path`.

    - missing file -> []
    - unreadable or malformed file -> error is logged and handed to `on_error`, [] returned
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Tasks file %s does not exist yet; starting empty.", path)
        return []

    try:
        raw = path.read_text(encoding="utf-8")
        tasks = decode_tasks(raw)
    except (OSError, UnicodeDecodeError, StorageError) as e:
        logger.error("Error reading tasks file %s: %s", path, e)
        if on_error is not None:
            on_error(e if isinstance(e, StorageError) else StorageError(str(e)))
        return []

    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def save_tasks(
    path: str | Path, tasks: Iterable[Task], *, on_error: ErrorCallback | None = None
) -> bool:
    """
    Overwrite `path` with the full collection.

    Returns False (after logging the reason and handing it to `on_error`) when
    nothing could be written.
    """
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")

    try:
        payload = encode_tasks(tasks)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except (OSError, StorageError) as e:
        logger.error("Error saving tasks file %s: %s", path, e)
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        if on_error is not None:
            on_error(e if isinstance(e, StorageError) else StorageError(str(e)))
        return False

    logger.debug("Saved tasks to %s", path)
    return True
