# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from ..errors import ValidationError


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are the literal strings stored on disk."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus:
        """Strict parse: unknown or missing values raise ValidationError."""
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError(
                f"Invalid status. Valid statuses are: {', '.join(cls.values())}"
            ) from None


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        # Key order is the on-disk field order.
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one decoded JSON object.

        Raises ValueError on anything that is not a well-formed record.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid task id: {task_id!r}")

        description = raw.get("description")
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"task {task_id}: description must be a non-empty string")

        status = raw.get("status")
        if status not in TaskStatus.values():
            raise ValueError(f"task {task_id}: unknown status {status!r}")

        stamps: dict[str, str] = {}
        for key in ("createdAt", "updatedAt"):
            value = raw.get(key)
            if not isinstance(value, str):
                raise ValueError(f"task {task_id}: {key} must be an ISO-8601 string")
            parse_timestamp(value)
            stamps[key] = value

        return cls(
            id=task_id,
            description=description,
            status=TaskStatus(status),
            created_at=stamps["createdAt"],
            updated_at=stamps["updatedAt"],
        )
