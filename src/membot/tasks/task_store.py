# src/membot/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator

from .task_models import Task, TaskKind, TaskStatus, build_task, render_summary

logger = logging.getLogger(__name__)


class TaskIdError(IndexError):
    """Raised when a task id is outside [1, len(store)] (or the store is empty)."""

    def __init__(self, task_id: int | None, size: int) -> None:
        self.task_id = task_id
        self.size = size
        if task_id is None:
            super().__init__("task store is empty")
        else:
            super().__init__(f"task id {task_id} out of range 1..{size}")


class TaskStore:
    """
    In-memory, ordered task collection.

    Ids are positional and 1-based:
    - id N is whatever task currently sits at position N
    - deleting a task shifts every later task down by one

    Callers must re-resolve tasks by id after any mutation; never cache an id
    (or a Task object) across one. Status changes replace the slot with an
    updated copy, so held references go stale.

    Not thread-safe: mutations must be serialized by the caller (see AppState.lock).
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.snapshot())

    def snapshot(self) -> list[Task]:
        return list(self._tasks)

    # ---- creation ----

    def create(
        self,
        kind: TaskKind,
        title: str,
        *,
        deadline: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> Task:
        task = build_task(kind, title, deadline=deadline, start=start, end=end)
        return self.add(task)

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        logger.debug("Task added id=%s kind=%s", len(self._tasks), task.__class__.__name__)
        return task

    # ---- lookup ----

    def is_id_valid(self, task_id: int) -> bool:
        return 1 <= task_id <= len(self._tasks)

    def _check_id(self, task_id: int) -> None:
        if not self.is_id_valid(task_id):
            raise TaskIdError(task_id, len(self._tasks))

    def get(self, task_id: int) -> Task:
        self._check_id(task_id)
        return self._tasks[task_id - 1]

    def list_all(self) -> list[str]:
        return [render_summary(t) for t in self._tasks]

    def list_one(self, task_id: int) -> str:
        return render_summary(self.get(task_id))

    def find(self, keyword: str) -> list[Task]:
        """Tasks whose title contains `keyword` (case-sensitive), in store order."""
        return [t for t in self._tasks if keyword in t.title]

    def find_with_ids(self, keyword: str) -> list[tuple[int, Task]]:
        """Like find(), paired with each match's current id."""
        return [(i, t) for i, t in enumerate(self._tasks, start=1) if keyword in t.title]

    # ---- mutation ----

    def _set_status(self, task_id: int, status: TaskStatus) -> Task:
        self._check_id(task_id)
        updated = dataclasses.replace(self._tasks[task_id - 1], status=status)
        self._tasks[task_id - 1] = updated
        logger.debug("Task status id=%s status=%s", task_id, status.value)
        return updated

    def set_completed(self, task_id: int) -> Task:
        return self._set_status(task_id, TaskStatus.COMPLETED)

    def set_new(self, task_id: int) -> Task:
        return self._set_status(task_id, TaskStatus.NEW)

    def delete(self, task_id: int) -> Task:
        self._check_id(task_id)
        task = self._tasks.pop(task_id - 1)
        logger.debug("Task deleted id=%s remaining=%s", task_id, len(self._tasks))
        return task

    def delete_last(self) -> Task:
        if not self._tasks:
            raise TaskIdError(None, 0)
        task = self._tasks.pop()
        logger.debug("Last task deleted remaining=%s", len(self._tasks))
        return task

    def clear(self) -> None:
        self._tasks.clear()

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        logger.debug("Task store replaced total=%s", len(self._tasks))
