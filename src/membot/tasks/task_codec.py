# src/membot/tasks/task_codec.py

"""
Line codec for the task file.

One record per line:

    b64(kind) | b64(title) | b64(status) | b64(deadline) | b64(start) | b64(end)

Each field is base64'd on its own, so a title may safely contain " | ".
Fields that do not apply to a task's kind hold PLACEHOLDER.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Iterable

from .task_models import (
    DeadlineTask,
    EventTask,
    Task,
    TaskKind,
    TaskStatus,
    TodoTask,
    build_task,
    task_kind,
)
from .task_store import TaskStore

logger = logging.getLogger(__name__)

SEPARATOR = " | "
PLACEHOLDER = "~"
FIELD_COUNT = 6


class CorruptRecordError(ValueError):
    """A stored line could not be decoded. The whole load is rejected."""

    def __init__(self, line_no: int, reason: str) -> None:
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"corrupt task record on line {line_no}: {reason}")


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _unb64(field: str, line_no: int) -> str:
    try:
        return base64.b64decode(field, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise CorruptRecordError(line_no, f"bad field encoding ({e})") from e


def _fields(task: Task) -> tuple[str, str, str]:
    match task:
        case TodoTask():
            return PLACEHOLDER, PLACEHOLDER, PLACEHOLDER
        case DeadlineTask(deadline=deadline):
            return deadline, PLACEHOLDER, PLACEHOLDER
        case EventTask(start=start, end=end):
            return PLACEHOLDER, start, end
    raise TypeError(f"not a task: {task!r}")


def encode_task(task: Task) -> str:
    deadline, start, end = _fields(task)
    parts = (task_kind(task).value, task.title, task.status.value, deadline, start, end)
    return SEPARATOR.join(_b64(p) for p in parts)


def encode(tasks: TaskStore | Iterable[Task]) -> str:
    """Encode tasks in order, one newline-terminated line each."""
    return "".join(encode_task(t) + "\n" for t in tasks)


def decode_line(line: str, line_no: int = 1) -> Task:
    parts = line.split(SEPARATOR)
    if len(parts) != FIELD_COUNT:
        raise CorruptRecordError(line_no, f"expected {FIELD_COUNT} fields, got {len(parts)}")

    kind_raw, title, status_raw, deadline, start, end = (_unb64(p, line_no) for p in parts)

    try:
        kind = TaskKind(kind_raw)
    except ValueError:
        raise CorruptRecordError(line_no, f"unknown task kind {kind_raw!r}") from None
    try:
        status = TaskStatus(status_raw)
    except ValueError:
        raise CorruptRecordError(line_no, f"unknown task status {status_raw!r}") from None

    return build_task(kind, title, deadline=deadline, start=start, end=end, status=status)


def decode(data: str | Iterable[str]) -> list[Task]:
    """
    Decode a task file (text or lines) into tasks, in order.

    Blank lines are skipped. Any bad record raises CorruptRecordError; nothing
    is returned in that case.
    """
    lines = data.splitlines() if isinstance(data, str) else data
    out: list[Task] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        out.append(decode_line(line, line_no))
    return out


def load_into(store: TaskStore, data: str | Iterable[str]) -> int:
    """Replace the store content with decoded tasks. The store is untouched on error."""
    tasks = decode(data)
    store.replace_all(tasks)
    logger.debug("Decoded %d tasks", len(tasks))
    return len(tasks)
