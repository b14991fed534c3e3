# tests/conftest.py

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

from task_tracker.core.state import AppState
from task_tracker.presentation.console_view import ConsoleView
from task_tracker.tasks.task_service import TaskService
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeChartRenderer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasks",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        db_path=tmp_path / "tasks.db",
        output_dir=tmp_path / "charts",
        priority_chart_name="task_priority.html",
        completion_chart_name="task_completion.html",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> Iterator[TaskStore]:
    with TaskStore(settings.db_path) as s:
        yield s


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


def _text_console(*, stderr: bool = False) -> Console:
    return Console(
        file=io.StringIO(),
        width=200,
        color_system=None,
        highlight=False,
        stderr=stderr,
    )


@pytest.fixture()
def view() -> ConsoleView:
    """ConsoleView writing plain text into StringIO buffers."""
    return ConsoleView(_text_console(), err_console=_text_console(stderr=True))


@pytest.fixture()
def charts() -> FakeChartRenderer:
    return FakeChartRenderer()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TaskStore,
    service: TaskService,
    view: ConsoleView,
    charts: FakeChartRenderer,
) -> AppState:
    """
    AppState wired with a fake chart renderer.

    NOTE: We keep a real SQLite store here because its correctness is part
    of what we want to test.
    """
    return AppState(settings=settings, store=store, service=service, view=view, charts=charts)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
