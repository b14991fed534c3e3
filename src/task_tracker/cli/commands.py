# src/task_tracker/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..errors import ValidationError
from ..presentation.charts import write_stats_charts
from ..tasks.task_models import DEFAULT_PRIORITY
from ..tasks.task_service import parse_task_id

CommandHandler = Callable[[AppState, argparse.Namespace], None]
ArgsConfigurer = Callable[[argparse.ArgumentParser], None]
ArgsValidator = Callable[[argparse.Namespace], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    configure: ArgsConfigurer | None = None
    validate: ArgsValidator | None = None


class CommandRegistry:
    """
    Subcommand registry used by the CLI entrypoint (add, list, complete, stats).

    Each command contributes its own argparse subparser. `validate` runs on the
    parsed arguments before the store is opened, so bad input never touches storage.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        configure: ArgsConfigurer | None = None,
        validate: ArgsValidator | None = None,
    ) -> None:
        key = name.lower()
        self._commands[key] = Command(key, handler, help_text, configure, validate)

    def names(self) -> list[str]:
        return list(self._commands)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def build_parser(self, prog: str = "tasks") -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=prog, description="A simple task tracker")
        subparsers = parser.add_subparsers(dest="command", metavar="<command>")
        for cmd in self._commands.values():
            sub = subparsers.add_parser(cmd.name, help=cmd.help_text, description=cmd.help_text)
            if cmd.configure is not None:
                cmd.configure(sub)
        return parser

    def validate(self, args: argparse.Namespace) -> None:
        cmd = self._commands[args.command]
        if cmd.validate is not None:
            cmd.validate(args)

    def handle(self, state: AppState, args: argparse.Namespace) -> None:
        cmd = self._commands[args.command]
        logger.debug("Dispatching command=%s", cmd.name)
        cmd.handler(state, args)


registry = CommandRegistry()


def _title_from_args(args: argparse.Namespace) -> str:
    return " ".join(args.title).strip()


# ---- add ----

def _configure_add(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("title", nargs="+", help="task title (words are joined with spaces)")
    parser.add_argument(
        "-p",
        "--priority",
        type=int,
        default=DEFAULT_PRIORITY,
        help="task priority (1-5, default: %(default)s)",
    )


def _validate_add(args: argparse.Namespace) -> None:
    if not _title_from_args(args):
        raise ValidationError("task title must not be empty")


def cmd_add(state: AppState, args: argparse.Namespace) -> None:
    title = _title_from_args(args)
    state.service.add_task(title, args.priority)
    state.view.render_added(title, args.priority)


# ---- list ----

def cmd_list(state: AppState, args: argparse.Namespace) -> None:
    state.view.render_task_list(state.service.list_tasks())


# ---- complete ----

def _configure_complete(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("task_id", metavar="id", help="id shown by `list`")


def _validate_complete(args: argparse.Namespace) -> None:
    parse_task_id(args.task_id)


def cmd_complete(state: AppState, args: argparse.Namespace) -> None:
    task_id = state.service.complete_task(args.task_id)
    state.view.render_completed(task_id)


# ---- stats ----

def cmd_stats(state: AppState, args: argparse.Namespace) -> None:
    stats = state.service.compute_stats()
    settings = state.settings
    written = write_stats_charts(
        stats,
        state.charts,
        output_dir=settings.output_dir,
        priority_name=settings.priority_chart_name,
        completion_name=settings.completion_chart_name,
    )
    state.view.render_stats(stats, written)


registry.register(
    "add",
    cmd_add,
    help_text="Add a new task",
    configure=_configure_add,
    validate=_validate_add,
)
registry.register("list", cmd_list, help_text="List all tasks")
registry.register(
    "complete",
    cmd_complete,
    help_text="Mark a task as completed",
    configure=_configure_complete,
    validate=_validate_complete,
)
registry.register("stats", cmd_stats, help_text="Show task statistics and charts")
