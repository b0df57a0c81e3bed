# tests/test_commands.py

from __future__ import annotations

import io

from task_tracker.cli.commands import CommandContext, CommandRegistry, format_task
from task_tracker.tasks.task_models import Task, TaskStatus
from task_tracker.tasks.task_store import TaskStore


def _ctx(store: TaskStore) -> CommandContext:
    return CommandContext(store=store, out=io.StringIO(), err=io.StringIO())


def test_registry_checks_arity_before_calling_handler(store: TaskStore) -> None:
    reg = CommandRegistry()
    calls: list[list[str]] = []

    def handler(ctx, args):
        calls.append(args)
        return True

    reg.register("pair", handler, "two args", usage="pair <a> <b>", min_args=2)

    ctx = _ctx(store)
    assert reg.handle(ctx, "pair", ["x"]) is False
    assert reg.handle(ctx, "pair", ["x", "y", "z"]) is False
    assert reg.handle(ctx, "pair", ["x", "y"]) is True
    assert calls == [["x", "y"]]
    assert "Usage: task-cli pair <a> <b>" in ctx.out.getvalue()


def test_registry_unknown_and_aliases(store: TaskStore) -> None:
    reg = CommandRegistry()
    reg.register("help", lambda ctx, args: True, "help", variadic=True, aliases=["-h"])

    ctx = _ctx(store)
    assert reg.handle(ctx, "nope", []) is None
    assert reg.handle(ctx, "-h", ["anything", "else"]) is True
    assert reg.names() == ["help"]


def test_help_lists_every_command() -> None:
    reg = CommandRegistry()
    reg.register("add", lambda ctx, args: True, "Add a new task", usage='add "description"', min_args=1)
    reg.register("list", lambda ctx, args: True, "List tasks", usage="list [status]", max_args=1)

    text = reg.build_help("tt")
    assert "tt <command> [arguments]" in text
    assert 'add "description"' in text
    assert "List tasks" in text


def test_format_task() -> None:
    task = Task(
        id=3,
        description="Ship it",
        status=TaskStatus.DONE,
        created_at="2024-05-01T12:00:00.000Z",
        updated_at="2024-05-01T12:00:00.000Z",
    )
    assert format_task(task) == "[3] ✅ Ship it (done)"
