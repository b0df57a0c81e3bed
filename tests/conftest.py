# tests/conftest.py

from __future__ import annotations

import io
import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from task_tracker.cli.main import main
from task_tracker.config import Settings
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock


@dataclass(slots=True)
class CliResult:
    exit_code: int
    stdout: str
    stderr: str


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def settings(tasks_path: Path) -> Settings:
    """
    Settings pointing at a per-test tasks file.

    Built directly rather than from the environment to keep tests isolated.
    """
    return Settings(
        app_name="task-cli",
        log_level="WARNING",
        log_file=None,
        tasks_file=tasks_path,
        strict_exit=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tasks_path: Path, clock: FakeClock) -> TaskStore:
    return TaskStore(tasks_path, clock=clock)


@pytest.fixture()
def run_cli(settings: Settings, clock: FakeClock) -> Callable[..., CliResult]:
    """Run one CLI invocation in-process and capture both streams."""

    def _run(*argv: str, settings_override: Settings | None = None) -> CliResult:
        out, err = io.StringIO(), io.StringIO()
        code = main(
            list(argv),
            settings=settings_override or settings,
            stdout=out,
            stderr=err,
            clock=clock,
        )
        return CliResult(exit_code=code, stdout=out.getvalue(), stderr=err.getvalue())

    return _run


@pytest.fixture()
def read_store(tasks_path: Path) -> Callable[[], list[dict]]:
    def _read() -> list[dict]:
        return json.loads(tasks_path.read_text(encoding="utf-8"))

    return _read
