# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings once,
- opens the SQLite store (creating it on first run),
- wires the service, the console view and the chart renderer into AppState.
"""

from __future__ import annotations

import logging

from rich.console import Console

from ..config import get_settings
from ..core.ports import ChartRenderer
from ..core.state import AppState
from ..presentation.charts import EChartsRenderer
from ..presentation.console_view import ConsoleView, PriorityPalette
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_view(
    *,
    console: Console | None = None,
    err_console: Console | None = None,
    palette: PriorityPalette | None = None,
) -> ConsoleView:
    return ConsoleView(console, err_console=err_console, palette=palette)


def create_initial_state(
    *,
    settings=None,
    view: ConsoleView | None = None,
    charts: ChartRenderer | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises StorageUnavailable if the database cannot be opened.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.db_path)
    store.initialize()

    state = AppState(
        settings=settings,
        store=store,
        service=TaskService(store),
        view=view or create_view(),
        charts=charts or EChartsRenderer(),
    )
    logger.debug("State ready db=%s output_dir=%s", settings.db_path, settings.output_dir)
    return state
