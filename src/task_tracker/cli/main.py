# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, opens the store, runs exactly one
command and maps failures to exit codes:
- 0 success (including `complete` on an unknown id),
- 1 storage / chart file failure,
- 2 usage or validation error (nothing is written).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import get_settings
from ..errors import TaskTrackerError, ValidationError
from ..logging_setup import setup_logging
from ..presentation.console_view import ConsoleView
from .bootstrap import create_initial_state, create_view
from .commands import registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _exit_code_for(error: TaskTrackerError) -> int:
    if isinstance(error, ValidationError):
        return EXIT_USAGE
    return EXIT_FAILURE


def main(
    argv: Sequence[str] | None = None,
    *,
    settings=None,
    view: ConsoleView | None = None,
    charts=None,
) -> int:
    if settings is None:
        settings = get_settings()

    parser = registry.build_parser(prog=str(getattr(settings, "app_name", "tasks")))
    try:
        args = parser.parse_args(None if argv is None else list(argv))
    except SystemExit as exc:
        # argparse already printed usage / help
        return exc.code if isinstance(exc.code, int) else EXIT_USAGE

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "log_dir", ".local/tasks"), console_level=console_level)

    view = view or create_view()

    try:
        registry.validate(args)
    except ValidationError as e:
        logger.info("Rejected %s: %s", args.command, e)
        view.render_error(args.command, e)
        return EXIT_USAGE

    try:
        with create_initial_state(settings=settings, view=view, charts=charts) as state:
            registry.handle(state, args)
    except TaskTrackerError as e:
        logger.info("Command %s failed: %s", args.command, e, exc_info=True)
        view.render_error(args.command, e)
        return _exit_code_for(e)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
