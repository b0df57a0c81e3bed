# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from ..errors import TaskTrackerError, ValidationError
from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_store import TaskStore, parse_task_id

logger = logging.getLogger(__name__)

STATUS_INDICATORS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "⏳",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.DONE: "✅",
}

RULE_WIDTH = 50


@dataclass(slots=True)
class CommandContext:
    """Everything a handler may touch: the store and the two output streams."""

    store: TaskStore
    out: TextIO
    err: TextIO
    prog: str = "task-cli"

    def say(self, text: str = "") -> None:
        print(text, file=self.out)

    def error(self, text: str) -> None:
        print(f"Error: {text}", file=self.err)

    def usage(self, usage: str) -> None:
        print(f"Usage: {self.prog} {usage}", file=self.out)


CommandHandler = Callable[[CommandContext, list[str]], bool]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    handler: CommandHandler
    help_text: str
    usage: str
    min_args: int = 0
    max_args: int | None = 0
    missing_message: str = "Missing arguments"


class CommandRegistry:
    """Dispatch table: command name -> handler + arity + help."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        usage: str | None = None,
        min_args: int = 0,
        max_args: int | None = None,
        variadic: bool = False,
        missing_message: str = "Missing arguments",
        aliases: list[str] | None = None,
    ) -> None:
        spec = CommandSpec(
            name=name,
            handler=handler,
            help_text=help_text,
            usage=usage or name,
            min_args=min_args,
            max_args=None if variadic else (min_args if max_args is None else max_args),
            missing_message=missing_message,
        )
        self._commands[name] = spec
        for alias in aliases or []:
            self._aliases[alias] = name

    def get(self, name: str) -> CommandSpec | None:
        return self._commands.get(self._aliases.get(name, name))

    def names(self) -> list[str]:
        return list(self._commands)

    def handle(self, ctx: CommandContext, name: str, args: list[str]) -> bool | None:
        """
        Run one command.

        Returns None if `name` is not a registered command, otherwise whether the
        command succeeded. User errors are reported on ctx and never raised.
        """
        spec = self.get(name)
        if spec is None:
            return None

        try:
            if len(args) < spec.min_args:
                raise ValidationError(spec.missing_message, hint=spec.usage)
            if spec.max_args is not None and len(args) > spec.max_args:
                extra = " ".join(args[spec.max_args :])
                raise ValidationError(
                    f"Unexpected extra arguments: {extra} (quote descriptions that contain spaces)",
                    hint=spec.usage,
                )
            return spec.handler(ctx, args)
        except TaskTrackerError as e:
            logger.debug("Command %s failed: %s", spec.name, e)
            ctx.error(str(e))
            hint = getattr(e, "hint", None)
            if hint:
                ctx.usage(hint)
            return False

    def build_help(self, prog: str = "task-cli") -> str:
        width = max(len(s.usage) for s in self._commands.values()) + 3
        lines = [
            "",
            "Task Tracker CLI - A simple command line task manager",
            "",
            "USAGE:",
            f"  {prog} <command> [arguments]",
            "",
            "COMMANDS:",
        ]
        for spec in self._commands.values():
            lines.append(f"  {spec.usage:<{width}}{spec.help_text}")
        lines += [
            "",
            "EXAMPLES:",
            f'  {prog} add "Buy groceries"',
            f'  {prog} update 1 "Buy groceries and cook dinner"',
            f"  {prog} mark-done 1",
            f"  {prog} list done",
            f"  {prog} delete 1",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    return f"[{task.id}] {STATUS_INDICATORS[task.status]} {task.description} ({task.status.value})"


def _load(ctx: CommandContext) -> list[Task]:
    tasks = ctx.store.load()
    if ctx.store.last_error is not None:
        ctx.error(f"Could not read tasks file {ctx.store.path}: {ctx.store.last_error}")
    return tasks


def _persist(ctx: CommandContext) -> bool:
    if ctx.store.save():
        return True
    ctx.error(f"Could not save tasks file {ctx.store.path}: {ctx.store.last_error}")
    return False


def cmd_add(ctx: CommandContext, args: list[str]) -> bool:
    description = args[0]
    if not description.strip():
        raise ValidationError("Task description is required", hint='add "Task description"')

    _load(ctx)
    task = ctx.store.add(description)
    if not _persist(ctx):
        return False
    ctx.say(f"Task added successfully (ID: {task.id})")
    return True


def cmd_update(ctx: CommandContext, args: list[str]) -> bool:
    task_id = parse_task_id(args[0])
    description = args[1]
    if not description.strip():
        raise ValidationError(
            "Task ID and description are required", hint='update <id> "New description"'
        )

    _load(ctx)
    ctx.store.update(task_id, description)
    if not _persist(ctx):
        return False
    ctx.say(f"Task {task_id} updated successfully")
    return True


def cmd_delete(ctx: CommandContext, args: list[str]) -> bool:
    task_id = parse_task_id(args[0])

    _load(ctx)
    ctx.store.delete(task_id)
    if not _persist(ctx):
        return False
    ctx.say(f"Task {task_id} deleted successfully")
    return True


def _mark(ctx: CommandContext, args: list[str], status: TaskStatus) -> bool:
    task_id = parse_task_id(args[0])

    _load(ctx)
    ctx.store.mark(task_id, status)
    if not _persist(ctx):
        return False
    ctx.say(f"Task {task_id} marked as {status.value}")
    return True


def cmd_mark_in_progress(ctx: CommandContext, args: list[str]) -> bool:
    return _mark(ctx, args, TaskStatus.IN_PROGRESS)


def cmd_mark_done(ctx: CommandContext, args: list[str]) -> bool:
    return _mark(ctx, args, TaskStatus.DONE)


def cmd_list(ctx: CommandContext, args: list[str]) -> bool:
    """
    list          -> every task
    list <status> -> only tasks with that status
    """
    # an empty argument means no filter
    status = TaskStatus.parse(args[0]) if args and args[0] else None

    all_tasks = _load(ctx)
    if not all_tasks:
        ctx.say("No tasks found.")
        return True

    tasks = ctx.store.list_tasks(status)
    if not tasks:
        ctx.say(f"No tasks found with status: {status}")
        return True

    ctx.say()
    ctx.say(f"{status.value.upper()} TASKS:" if status else "ALL TASKS:")
    ctx.say("=" * RULE_WIDTH)
    for task in tasks:
        ctx.say(format_task(task))
    ctx.say()
    ctx.say(f"Total: {len(tasks)} task(s)")
    return True


def cmd_help(ctx: CommandContext, args: list[str]) -> bool:
    ctx.say(registry.build_help(ctx.prog))
    return True


registry.register(
    "add",
    cmd_add,
    help_text="Add a new task",
    usage='add "description"',
    min_args=1,
    missing_message="Task description is required",
)
registry.register(
    "update",
    cmd_update,
    help_text="Update an existing task",
    usage='update <id> "description"',
    min_args=2,
    missing_message="Task ID and description are required",
)
registry.register(
    "delete",
    cmd_delete,
    help_text="Delete a task",
    usage="delete <id>",
    min_args=1,
    missing_message="Task ID is required",
)
registry.register(
    "mark-in-progress",
    cmd_mark_in_progress,
    help_text="Mark a task as in progress",
    usage="mark-in-progress <id>",
    min_args=1,
    missing_message="Task ID is required",
)
registry.register(
    "mark-done",
    cmd_mark_done,
    help_text="Mark a task as done",
    usage="mark-done <id>",
    min_args=1,
    missing_message="Task ID is required",
)
registry.register(
    "list",
    cmd_list,
    help_text="List all tasks, or only those with the given status",
    usage="list [todo|in-progress|done]",
    min_args=0,
    max_args=1,
)
registry.register(
    "help",
    cmd_help,
    help_text="Show this help message",
    variadic=True,
    aliases=["-h", "--help"],
)
