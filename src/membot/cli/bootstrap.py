# src/membot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task store into AppState,
- loads/saves the task file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_codec import CorruptRecordError
from ..tasks.task_file import read_tasks, write_tasks
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    Path(settings.tasks_path).parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(settings=settings, task_store=TaskStore())


def load_task_file(state: AppState) -> str | None:
    """
    Populate state.task_store from the task file.

    Returns None on success, or a user-facing warning. On a corrupt record
    the whole load is rejected, the store stays empty and persistence is
    disabled for the session so the file is kept as-is for manual repair.
    """
    path = Path(state.settings.tasks_path)
    try:
        read_tasks(path, state.task_store)
    except CorruptRecordError as e:
        state.persistence_enabled = False
        logger.error("Task file %s is corrupt (%s); persistence disabled.", path, e)
        return (
            f"Could not load tasks from {path}: {e}. "
            "Starting with an empty list; changes will NOT be saved this session."
        )
    except OSError:
        state.persistence_enabled = False
        logger.exception("Failed to read task file %s", path)
        return f"Could not read {path}. Starting with an empty list; changes will NOT be saved."
    return None


def save_task_file(state: AppState) -> bool:
    """Rewrite the task file. Returns False (and logs) on failure or when persistence is off."""
    if not state.persistence_enabled:
        logger.debug("Persistence disabled; skipping save.")
        return False
    path = Path(state.settings.tasks_path)
    try:
        with state.lock:
            write_tasks(path, state.task_store)
    except OSError:
        logger.exception("Failed to save tasks to %s", path)
        return False
    return True
