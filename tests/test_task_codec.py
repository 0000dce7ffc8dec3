# tests/test_task_codec.py

from __future__ import annotations

import base64

import pytest

from membot.tasks import task_codec
from membot.tasks.task_codec import CorruptRecordError, decode, encode, load_into
from membot.tasks.task_models import DeadlineTask, EventTask, TaskKind, TaskStatus, TodoTask
from membot.tasks.task_store import TaskStore


def _b64(s: str) -> str:
    return base64.b64encode(s.encode("utf-8")).decode("ascii")


def _line(*fields: str) -> str:
    return " | ".join(_b64(f) for f in fields)


def test_encode_one_line_per_task_in_order(store: TaskStore) -> None:
    text = encode(store)
    lines = text.split("\n")

    assert text.endswith("\n")
    assert lines[-1] == ""
    assert lines[:-1] == [
        _line("TODO", "buy milk", "NEW", "~", "~", "~"),
        _line("DEADLINE", "submit report", "NEW", "2024-01-01", "~", "~"),
        _line("EVENT", "team sync", "NEW", "~", "2024-01-02 10:00", "2024-01-02 11:00"),
    ]


def test_encode_is_deterministic(store: TaskStore) -> None:
    assert encode(store) == encode(store)
    assert encode(store) == encode(store.snapshot())


def test_encode_empty_store() -> None:
    assert encode(TaskStore()) == ""
    assert decode("") == []


def test_round_trip_preserves_everything(store: TaskStore) -> None:
    store.set_completed(1)
    store.set_completed(3)
    store.create(TaskKind.SIMPLE, "pipes | in | title")
    store.create(TaskKind.DEADLINE, "ünïcödé ✓", deadline="~")

    assert decode(encode(store)) == store.snapshot()


def test_deadline_completed_scenario() -> None:
    s = TaskStore()
    s.create(TaskKind.DEADLINE, "submit report", deadline="2024-01-01")
    s.set_completed(1)

    (task,) = decode(encode(s))
    assert isinstance(task, DeadlineTask)
    assert task.title == "submit report"
    assert task.deadline == "2024-01-01"
    assert task.status is TaskStatus.COMPLETED


def test_decode_accepts_lines_and_skips_blanks() -> None:
    lines = [
        _line("TODO", "a", "NEW", "~", "~", "~") + "\n",
        "\n",
        "   ",
        _line("EVENT", "b", "COMPLETED", "~", "s", "e") + "\r\n",
    ]
    assert decode(lines) == [
        TodoTask("a"),
        EventTask("b", start="s", end="e", status=TaskStatus.COMPLETED),
    ]


def test_decode_ignores_fields_not_used_by_kind() -> None:
    (task,) = decode(_line("TODO", "a", "NEW", "x", "y", "z"))
    assert task == TodoTask("a")


@pytest.mark.parametrize(
    ("line", "reason"),
    [
        (_line("TODO", "a", "NEW", "~", "~"), "expected 6 fields"),
        (_line("TODO", "a", "NEW", "~", "~", "~", "~"), "expected 6 fields"),
        ("not base64!", "expected 6 fields"),
        (_line("TODO", "a", "NEW", "~", "~", "~").replace(_b64("a"), "@@@@"), "bad field encoding"),
        (_line("CHORE", "a", "NEW", "~", "~", "~"), "unknown task kind"),
        (_line("SIMPLE", "a", "NEW", "~", "~", "~"), "unknown task kind"),
        (_line("TODO", "a", "DONE", "~", "~", "~"), "unknown task status"),
    ],
)
def test_decode_rejects_corrupt_records(line: str, reason: str) -> None:
    with pytest.raises(CorruptRecordError) as exc:
        decode(line)
    assert reason in exc.value.reason
    assert exc.value.line_no == 1


def test_decode_rejects_invalid_utf8() -> None:
    bad = base64.b64encode(b"\xff\xfe").decode("ascii")
    line = " | ".join([_b64("TODO"), bad, _b64("NEW"), _b64("~"), _b64("~"), _b64("~")])
    with pytest.raises(CorruptRecordError):
        decode(line)


def test_corrupt_record_reports_line_number() -> None:
    text = _line("TODO", "ok", "NEW", "~", "~", "~") + "\n\ngarbage\n"
    with pytest.raises(CorruptRecordError) as exc:
        decode(text)
    assert exc.value.line_no == 3


def test_load_into_rejects_whole_load_on_corrupt_line(store: TaskStore) -> None:
    before = store.snapshot()
    text = _line("TODO", "fine", "NEW", "~", "~", "~") + "\n" + _line("TODO", "x", "??", "~", "~", "~")

    with pytest.raises(CorruptRecordError):
        load_into(store, text)
    assert store.snapshot() == before


def test_load_into_replaces_content(store: TaskStore) -> None:
    other = TaskStore([TodoTask("only one", status=TaskStatus.COMPLETED)])
    assert load_into(store, encode(other)) == 1
    assert store.list_all() == ["[X] only one"]


def test_constants() -> None:
    assert task_codec.SEPARATOR == " | "
    assert task_codec.PLACEHOLDER == "~"
