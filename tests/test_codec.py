# tests/test_codec.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_tracker.errors import StorageError
from task_tracker.tasks.codec import decode_tasks, encode_tasks, load_tasks, save_tasks
from task_tracker.tasks.task_models import Task, TaskStatus


def _task(task_id: int, description: str, status: TaskStatus = TaskStatus.TODO) -> Task:
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at="2024-05-01T12:00:00.000Z",
        updated_at="2024-05-01T12:00:01.000Z",
    )


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    assert load_tasks(tmp_path / "nope.json") == []


def test_round_trip_preserves_values_and_order(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    tasks = [
        _task(3, "third", TaskStatus.DONE),
        _task(1, "first"),
        _task(7, "Ünïcode ✓", TaskStatus.IN_PROGRESS),
    ]

    assert save_tasks(path, tasks) is True
    assert load_tasks(path) == tasks


def test_file_layout_is_two_space_indented_array(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    save_tasks(path, [_task(1, "Buy milk")])

    text = path.read_text(encoding="utf-8")
    assert text.startswith('[\n  {\n    "id": 1,\n    "description": "Buy milk",')
    assert list(json.loads(text)[0]) == ["id", "description", "status", "createdAt", "updatedAt"]


def test_malformed_file_loads_empty_and_reports(tmp_path: Path, caplog) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level("ERROR"):
        assert load_tasks(path) == []
    assert "Error reading tasks file" in caplog.text


def test_decode_rejects_non_array_and_duplicate_ids() -> None:
    with pytest.raises(StorageError, match="expected a JSON array"):
        decode_tasks('{"id": 1}')

    dup = json.dumps([_task(1, "a").to_dict(), _task(1, "b").to_dict()])
    with pytest.raises(StorageError, match="duplicate task id 1"):
        decode_tasks(dup)


def test_save_failure_returns_false_and_leaves_no_temp_file(tmp_path: Path) -> None:
    target = tmp_path / "tasks.json"
    target.mkdir()

    assert save_tasks(target, [_task(1, "x")]) is False
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]


def test_save_replaces_old_content_completely(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    save_tasks(path, [_task(1, "a"), _task(2, "b"), _task(3, "c")])
    save_tasks(path, [_task(2, "b")])

    assert [t.id for t in load_tasks(path)] == [2]


def test_encode_ends_with_newline() -> None:
    assert encode_tasks([]) == "[]\n"


def test_errors_are_handed_to_the_callback(tmp_path: Path) -> None:
    errors: list[StorageError] = []
    corrupt = tmp_path / "tasks.json"
    corrupt.write_text("[1, 2", encoding="utf-8")
    blocked = tmp_path / "blocked"
    blocked.mkdir()

    assert load_tasks(corrupt, on_error=errors.append) == []
    assert save_tasks(blocked, [_task(1, "x")], on_error=errors.append) is False

    assert len(errors) == 2
    assert all(isinstance(e, StorageError) for e in errors)
    assert "invalid JSON" in str(errors[0])
