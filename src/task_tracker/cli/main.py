# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Reads settings, initializes logging, then runs exactly one command:
load the tasks file, mutate in memory, write it back.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_store import Clock
from .bootstrap import create_context
from .commands import CommandContext, registry

logger = logging.getLogger(__name__)


def dispatch(ctx: CommandContext, argv: Sequence[str]) -> bool:
    """Route argv[0] to its command. No arguments shows help."""
    if not argv:
        return registry.handle(ctx, "help", []) is not False

    name, args = argv[0], list(argv[1:])
    result = registry.handle(ctx, name, args)
    if result is None:
        ctx.error(f"Unknown command '{name}'")
        ctx.say(f'Use "{ctx.prog} help" to see available commands')
        return False
    return result


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    clock: Clock | None = None,
) -> int:
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        if settings is None:
            settings = get_settings()

        console_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
        if not isinstance(console_level, int):
            console_level = logging.WARNING
        setup_logging(console_level=console_level, log_file=settings.log_file, stream=err)

        logger.debug("Running %s with args=%s", settings.app_name, args)
        ctx = create_context(settings=settings, stdout=out, stderr=err, clock=clock)
        ok = dispatch(ctx, args)
    except Exception as e:
        logger.debug("Unhandled error while running command.", exc_info=True)
        print(f"An unexpected error occurred: {e}", file=err)
        ok = False

    if settings is not None and settings.strict_exit and not ok:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
