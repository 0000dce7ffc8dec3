# src/membot/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Runtime state shared by connectors.

    `lock` serializes every store mutation and save; hold it around
    "handle command -> persist" so no caller observes a half-applied change.
    `persistence_enabled` is switched off when the task file could not be
    loaded, so a damaged file is never overwritten.
    """

    # Settings object (config.Settings or a test stand-in).
    settings: Any
    task_store: TaskStore

    persistence_enabled: bool = True
    lock: threading.RLock = field(default_factory=threading.RLock)
