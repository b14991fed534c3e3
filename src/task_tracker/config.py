# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Every value has a default, so the tracker runs with zero configuration:
the database is ``tasks.db`` and the charts land in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_filename(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    # bare file names only; the directory comes from TASKS_OUTPUT_DIR
    return Path(raw.strip()).name


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Storage ----
    db_path: Path

    # ---- Chart artifacts ----
    output_dir: Path
    priority_chart_name: str
    completion_chart_name: str

    @property
    def priority_chart_path(self) -> Path:
        return self.output_dir / self.priority_chart_name

    @property
    def completion_chart_path(self) -> Path:
        return self.output_dir / self.completion_chart_name

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasks").strip() or "tasks"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/tasks"))

        db_path = _env_path(_k("DB_PATH"), Path("tasks.db"))

        output_dir = _env_path(_k("OUTPUT_DIR"), Path("."))
        priority_chart_name = _env_filename(_k("PRIORITY_CHART"), "task_priority.html")
        completion_chart_name = _env_filename(_k("COMPLETION_CHART"), "task_completion.html")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            db_path=db_path,
            output_dir=output_dir,
            priority_chart_name=priority_chart_name,
            completion_chart_name=completion_chart_name,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
