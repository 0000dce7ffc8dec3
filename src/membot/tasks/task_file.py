# src/membot/tasks/task_file.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import task_codec
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def read_tasks(path: str | Path, store: TaskStore) -> int:
    """
    Load the task file at `path` into `store`.

    Missing file -> empty store. Raises task_codec.CorruptRecordError on a bad
    record (store left as it was) and OSError on read failures.
    """
    path = Path(path)
    if not path.exists():
        store.clear()
        logger.info("No task file at %s, starting empty.", path)
        return 0

    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        line_no = raw.count(b"\n", 0, e.start) + 1
        raise task_codec.CorruptRecordError(line_no, "file is not valid UTF-8") from e
    n = task_codec.load_into(store, text)
    logger.info("Loaded %d tasks from %s", n, path)
    return n


def write_tasks(path: str | Path, store: TaskStore) -> None:
    """Rewrite the whole task file (tmp file + rename). Raises OSError on failure."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(task_codec.encode(store), "utf-8")
    os.replace(tmp, path)
    logger.debug("Saved %d tasks to %s", len(store), path)
