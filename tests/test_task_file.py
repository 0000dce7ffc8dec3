# tests/test_task_file.py

from __future__ import annotations

from pathlib import Path

import pytest

from membot.tasks.task_codec import CorruptRecordError, encode
from membot.tasks.task_file import read_tasks, write_tasks
from membot.tasks.task_store import TaskStore


def test_write_then_read(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "nested" / "tasks.txt"
    store.set_completed(2)
    write_tasks(path, store)

    assert path.read_text("utf-8") == encode(store)
    assert not path.with_suffix(".txt.tmp").exists()

    loaded = TaskStore()
    assert read_tasks(path, loaded) == 3
    assert loaded.snapshot() == store.snapshot()


def test_missing_file_gives_empty_store(tmp_path: Path, store: TaskStore) -> None:
    assert read_tasks(tmp_path / "absent.txt", store) == 0
    assert len(store) == 0


def test_corrupt_file_propagates_and_keeps_store(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("definitely | not | a | task\n", "utf-8")
    before = store.snapshot()

    with pytest.raises(CorruptRecordError):
        read_tasks(path, store)
    assert store.snapshot() == before


def test_write_overwrites_whole_file(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "tasks.txt"
    write_tasks(path, store)
    store.delete(1)
    store.delete(1)
    write_tasks(path, store)

    assert len(path.read_text("utf-8").splitlines()) == 1


def test_invalid_utf8_raises_corrupt_record_with_line(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "tasks.txt"
    write_tasks(path, store)
    path.write_bytes(path.read_bytes() + b"\xc3\x28 | x\n")
    before = store.snapshot()

    with pytest.raises(CorruptRecordError) as exc:
        read_tasks(path, store)
    assert exc.value.line_no == 4
    assert exc.value.reason == "file is not valid UTF-8"
    assert store.snapshot() == before
