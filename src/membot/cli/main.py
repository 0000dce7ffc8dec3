# src/membot/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task file, runs the console
REPL, then saves once more on the way out.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path

from ..cli.bootstrap import create_initial_state, load_task_file, save_task_file
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="membot", description="Personal task tracker.")
    parser.add_argument("--data-file", type=Path, default=None, help="Task file to load and save.")
    parser.add_argument("--log-level", default=None, help="Console log level (e.g. DEBUG, INFO).")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    if args.data_file is not None:
        settings = dataclasses.replace(settings, tasks_path=args.data_file.expanduser())
    if args.log_level:
        settings = dataclasses.replace(settings, log_level=args.log_level.upper())

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir if settings.log_to_file else None,
        console_level=console_level,
    )

    logger.info("Starting %s (tasks=%s)...", settings.app_name, settings.tasks_path)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    warning = load_task_file(state)
    if warning:
        print(warning)

    try:
        run_console_loop(state)
    finally:
        if state.persistence_enabled:
            save_task_file(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
