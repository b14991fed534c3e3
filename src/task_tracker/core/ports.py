# src/task_tracker/core/ports.py

"""
Ports (interfaces) used by the service and the presentation layer.

The service depends on Protocols instead of concrete implementations.
This keeps storage and the charting backend swappable and makes testing easier.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..presentation.charts import ChartSeries
    from ..tasks.task_models import Task, TaskCounts


class TaskRepo(Protocol):
    def insert(self, title: str, priority: int = 1) -> int: ...
    def query_all(self) -> list[Task]: ...
    def get(self, task_id: int) -> Task | None: ...
    def update_completion(self, task_id: int) -> None: ...
    def aggregate_counts(self) -> TaskCounts: ...


class ChartRenderer(Protocol):
    """
    Writes one self-contained chart file per call.

    The renderer only sees (label, value) series; layout and styling are its concern.
    """

    def render_bar(self, series: ChartSeries, path: Path) -> Path: ...
    def render_pie(self, series: ChartSeries, path: Path) -> Path: ...
