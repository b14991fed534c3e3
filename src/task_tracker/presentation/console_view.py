# src/task_tracker/presentation/console_view.py

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..tasks.task_models import Task, TaskStats

RULE = "=" * 50
DONE_MARK = "[✓]"
OPEN_MARK = "[ ]"


def _default_priority_colors() -> dict[int, str]:
    return {1: "green", 2: "blue", 3: "yellow", 4: "red", 5: "red"}


@dataclass(frozen=True, slots=True)
class PriorityPalette:
    """
    Colour names (rich styles) used by ConsoleView.

    Priorities outside the mapping fall back to `default`.
    """

    priority_colors: Mapping[int, str] = field(default_factory=_default_priority_colors)
    default: str = "blue"
    title: str = "cyan"
    header: str = "magenta"
    success: str = "green"
    warning: str = "yellow"
    error: str = "red"

    def for_priority(self, priority: int) -> str:
        return self.priority_colors.get(priority, self.default)


class ConsoleView:
    """Terminal rendering for the four commands."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        err_console: Console | None = None,
        palette: PriorityPalette | None = None,
    ) -> None:
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.palette = palette or PriorityPalette()

    def _c(self, text: object, style: str) -> str:
        return f"[{style}]{escape(str(text))}[/]"

    # Titles are user text: no :emoji: codes and no hard wrapping, one task per line.
    def _out(self, *objects: object) -> None:
        self.console.print(*objects, emoji=False, soft_wrap=True)

    def _err(self, *objects: object) -> None:
        self.err_console.print(*objects, emoji=False, soft_wrap=True)

    def render_added(self, title: str, priority: int) -> None:
        p = self.palette
        self._out(
            f"{self._c('Added task', p.success)}: {self._c(title, p.title)} "
            f"(Priority: {self._c(priority, p.warning)})"
        )

    def render_completed(self, task_id: int | str) -> None:
        p = self.palette
        self._out(f"{self._c('Completed', p.success)} task {self._c(task_id, p.title)}")

    def format_task_line(self, task: Task) -> str:
        p = self.palette
        if task.completed:
            status = self._c(DONE_MARK, p.success)
        else:
            status = self._c(OPEN_MARK, p.error)
        prio = self._c(task.priority, p.for_priority(task.priority))
        return f"{status} {task.id}. {self._c(task.title, p.title)} (Priority: {prio})"

    def render_task_list(self, tasks: Iterable[Task]) -> None:
        self._out()
        self._out(self._c("Task List:", self.palette.header))
        self._out(RULE)
        for task in tasks:
            self._out(self.format_task_line(task))
        self._out(RULE)

    def render_stats(self, stats: TaskStats, artifacts: Iterable[str | Path]) -> None:
        p = self.palette
        self._out()
        self._out(self._c("Task Statistics:", p.header))
        self._out(RULE)
        self._out(f"Total Tasks: {self._c(stats.total, p.title)}")
        self._out(f"Completed Tasks: {self._c(stats.completed, p.success)}")
        self._out(
            f"Completion Rate: {self._c(f'{stats.completion_rate:.1f}%', p.warning)}"
        )
        self._out()
        self._out("Charts have been generated:")
        for path in artifacts:
            self._out(self._c(f"- {Path(path).name}", p.success))

    def render_error(self, operation: str, error: BaseException) -> None:
        self._err(f"{self._c('Error', self.palette.error)}: {operation}: {escape(str(error))}")
