# src/membot/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.bootstrap import save_task_file
from ..cli.commands import EXIT_WORDS, CommandOutcome, CommandRegistry, OutcomeKind
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

INDENT = "    "

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _indent(text: str) -> str:
    return "\n".join(f"{INDENT}{line}" if line else "" for line in text.splitlines())


def handle_line(
    state: AppState,
    line: str,
    registry: CommandRegistry = command_registry,
) -> CommandOutcome:
    """
    Run one command and persist if it changed the store.

    Handling and saving happen under state.lock. If saving right after a task
    was added fails, that task is dropped again (delete_last) so memory and
    the file stay in step.
    """
    with state.lock:
        before = len(state.task_store)
        outcome = registry.handle(state.task_store, line)

        if not (outcome.changed and state.persistence_enabled and state.settings.autosave):
            return outcome

        if save_task_file(state):
            return outcome

        if len(state.task_store) == before + 1:
            state.task_store.delete_last()
            logger.warning("Rolled back new task after failed save.")
            return CommandOutcome(OutcomeKind.SAVE_ERROR, "Saving failed, so the task was not added.")
        return CommandOutcome.success(
            outcome.message, (*outcome.lines, "Warning: saving failed; this change may be lost.")
        )


def run_console_loop(
    state: AppState,
    *,
    read: InputFn | None = None,
    write: OutputFn | None = None,
) -> None:
    read = read or input
    write = write or print

    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "membot"))
    write(_indent(f"Hello! I'm {app_name}. Type \"help\" for commands, \"bye\" to quit."))

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_WORDS:
            logger.info("Console exit command received.")
            break

        try:
            outcome = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            write(_indent("Internal error while handling a command."))
            continue

        if not outcome.ok:
            logger.debug("Command %r -> %s", user_input, outcome.kind.value)
        write(_indent(outcome.render()))

    write(_indent("Bye. Hope to see you again soon!"))
    logger.info("Console connector finished.")
