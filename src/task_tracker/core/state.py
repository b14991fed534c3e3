# src/task_tracker/core/state.py

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Any

from ..core.ports import ChartRenderer
from ..presentation.console_view import ConsoleView
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Settings (or a SimpleNamespace in tests) for paths and file names.
    settings: Any

    store: TaskStore
    service: TaskService
    view: ConsoleView
    charts: ChartRenderer

    def close(self) -> None:
        """Release the store connection (no exceptions should escape)."""
        try:
            self.store.close()
        except Exception:
            logger.debug("Store close failed.", exc_info=True)

    def __enter__(self) -> AppState:
        return self

    def __exit__(self, *exc_info: object) -> None:
        with contextlib.suppress(Exception):
            self.close()
