# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from membot.core.state import AppState
from membot.tasks.task_models import TaskKind
from membot.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="membot-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.txt",
        autosave=True,
    )


@pytest.fixture()
def store() -> TaskStore:
    """Store with one task of each kind, all NEW."""
    s = TaskStore()
    s.create(TaskKind.SIMPLE, "buy milk")
    s.create(TaskKind.DEADLINE, "submit report", deadline="2024-01-01")
    s.create(TaskKind.EVENT, "team sync", start="2024-01-02 10:00", end="2024-01-02 11:00")
    return s


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return AppState(settings=settings, task_store=TaskStore())
