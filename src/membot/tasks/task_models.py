# src/membot/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """Task lifecycle status. Values double as the on-disk status tags."""

    NEW = "NEW"
    COMPLETED = "COMPLETED"

    @property
    def mark(self) -> str:
        return "X" if self is TaskStatus.COMPLETED else " "


class TaskKind(StrEnum):
    """
    Task kind. Values are the on-disk kind tags.

    Notes:
    - SIMPLE is stored as "TODO" so files written by older Membot builds still load.
    """

    SIMPLE = "TODO"
    DEADLINE = "DEADLINE"
    EVENT = "EVENT"


@dataclass(frozen=True, slots=True)
class TodoTask:
    title: str
    status: TaskStatus = TaskStatus.NEW


@dataclass(frozen=True, slots=True)
class DeadlineTask:
    title: str
    deadline: str
    status: TaskStatus = TaskStatus.NEW


@dataclass(frozen=True, slots=True)
class EventTask:
    title: str
    start: str
    end: str
    status: TaskStatus = TaskStatus.NEW


Task = TodoTask | DeadlineTask | EventTask


def task_kind(task: Task) -> TaskKind:
    match task:
        case TodoTask():
            return TaskKind.SIMPLE
        case DeadlineTask():
            return TaskKind.DEADLINE
        case EventTask():
            return TaskKind.EVENT
    raise TypeError(f"not a task: {task!r}")


def build_task(
    kind: TaskKind,
    title: str,
    *,
    deadline: str | None = None,
    start: str | None = None,
    end: str | None = None,
    status: TaskStatus = TaskStatus.NEW,
) -> Task:
    """
    Construct the variant for `kind`.

    Fields that do not apply to the kind are ignored; missing required ones
    raise ValueError.
    """
    match kind:
        case TaskKind.SIMPLE:
            return TodoTask(title=title, status=status)
        case TaskKind.DEADLINE:
            if deadline is None:
                raise ValueError("deadline is required for DEADLINE tasks")
            return DeadlineTask(title=title, deadline=deadline, status=status)
        case TaskKind.EVENT:
            if start is None or end is None:
                raise ValueError("start and end are required for EVENT tasks")
            return EventTask(title=title, start=start, end=end, status=status)
    raise ValueError(f"unknown task kind: {kind!r}")


def render_summary(task: Task) -> str:
    """One-line summary: "[X] title" for completed tasks, "[ ] title" for new ones."""
    return f"[{task.status.mark}] {task.title}"
