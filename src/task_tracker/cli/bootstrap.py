# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns Settings into a TaskStore and
a CommandContext bound to the process streams.
"""

from __future__ import annotations

import logging
from typing import TextIO

from ..config import Settings, get_settings
from ..tasks.task_store import Clock, TaskStore
from .commands import CommandContext

logger = logging.getLogger(__name__)


def create_store(*, settings: Settings | None = None, clock: Clock | None = None) -> TaskStore:
    if settings is None:
        settings = get_settings()
    store = TaskStore(settings.tasks_file, clock=clock)
    logger.debug("TaskStore bound to %s", store.path)
    return store


def create_context(
    *,
    settings: Settings | None = None,
    stdout: TextIO,
    stderr: TextIO,
    clock: Clock | None = None,
) -> CommandContext:
    """
    Build the per-invocation CommandContext.

    Keeping settings injectable makes the CLI testable without touching the
    process environment; falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    return CommandContext(
        store=create_store(settings=settings, clock=clock),
        out=stdout,
        err=stderr,
        prog=settings.app_name,
    )
