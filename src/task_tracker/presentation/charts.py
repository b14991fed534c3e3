# src/task_tracker/presentation/charts.py

"""
Chart data assembly and the pyecharts-backed renderer.

The stats command turns TaskStats into two ChartSeries (tasks per priority,
completed vs pending) and hands them to a ChartRenderer, which writes one HTML
file per chart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pyecharts import options as opts
from pyecharts.charts import Bar, Pie
from pyecharts.globals import ThemeType

from ..core.ports import ChartRenderer
from ..errors import ArtifactError
from ..tasks.task_models import TaskStats

logger = logging.getLogger(__name__)

PRIORITY_CHART_TITLE = "Tasks by Priority"
COMPLETION_CHART_TITLE = "Task Completion Status"


@dataclass(slots=True)
class ChartSeries:
    title: str
    series_name: str
    points: list[tuple[str, int]] = field(default_factory=list)

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.points]

    @property
    def values(self) -> list[int]:
        return [value for _, value in self.points]


def build_priority_series(by_priority: dict[int, int]) -> ChartSeries:
    """One "Priority N" bar per priority present, ascending."""
    points = [(f"Priority {prio}", int(count)) for prio, count in sorted(by_priority.items())]
    return ChartSeries(title=PRIORITY_CHART_TITLE, series_name="Tasks", points=points)


def build_completion_series(stats: TaskStats) -> ChartSeries:
    points = [
        ("Completed", stats.completed),
        ("Pending", stats.total - stats.completed),
    ]
    return ChartSeries(title=COMPLETION_CHART_TITLE, series_name="Completion", points=points)


class EChartsRenderer:
    """ChartRenderer that writes standalone ECharts HTML pages via pyecharts."""

    def __init__(self, *, bar_theme: str = ThemeType.WESTEROS) -> None:
        self._bar_theme = bar_theme

    def render_bar(self, series: ChartSeries, path: Path) -> Path:
        bar = Bar(init_opts=opts.InitOpts(theme=self._bar_theme))
        bar.add_xaxis(series.labels)
        bar.add_yaxis(series.series_name, series.values)
        bar.set_global_opts(title_opts=opts.TitleOpts(title=series.title))
        return Path(bar.render(str(path)))

    def render_pie(self, series: ChartSeries, path: Path) -> Path:
        pie = Pie()
        pie.add(series.series_name, [list(p) for p in series.points])
        pie.set_global_opts(title_opts=opts.TitleOpts(title=series.title))
        return Path(pie.render(str(path)))


def write_stats_charts(
    stats: TaskStats,
    renderer: ChartRenderer,
    *,
    output_dir: str | Path = ".",
    priority_name: str = "task_priority.html",
    completion_name: str = "task_completion.html",
) -> list[Path]:
    """
    Render both stats charts, overwriting previous files.

    Returns the written paths in display order (priority chart first).
    """
    out = Path(output_dir)
    priority_path = out / priority_name
    completion_path = out / completion_name

    try:
        out.mkdir(parents=True, exist_ok=True)
        written = [
            renderer.render_bar(build_priority_series(stats.by_priority), priority_path),
            renderer.render_pie(build_completion_series(stats), completion_path),
        ]
    except OSError as exc:
        raise ArtifactError(f"cannot write chart: {exc}") from exc

    logger.debug("Charts written: %s", ", ".join(str(p) for p in written))
    return written
