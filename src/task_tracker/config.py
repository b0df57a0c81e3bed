# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per invocation.
- Every variable is optional; malformed values fall back to defaults.
- Consumers may receive Settings explicitly (tests build their own).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"

DEFAULT_APP_NAME = "task-cli"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_TASKS_FILE = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path | None

    # ---- Storage ----
    tasks_file: Path

    # ---- Process behavior ----
    strict_exit: bool

    @staticmethod
    def from_env() -> "Settings":
        # .env is looked up from the working directory; real environment wins.
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)

        app_name = _env(_k("APP_NAME"), DEFAULT_APP_NAME)
        log_level = _env(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL).upper()
        log_file = _env_path(_k("LOG_FILE"), None)

        tasks_file = _env_path(_k("TASKS_FILE"), None) or Path(DEFAULT_TASKS_FILE)

        strict_exit = _env_bool(_k("STRICT_EXIT"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file=log_file,
            tasks_file=tasks_file,
            strict_exit=strict_exit,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
