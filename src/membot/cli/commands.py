# src/membot/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from ..tasks.task_models import Task, TaskKind, render_summary
from ..tasks.task_store import TaskIdError, TaskStore

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid Task ID!"
EMPTY_LIST_MESSAGE = "No tasks yet."
EXIT_WORDS = ("bye", "exit", "quit")


class OutcomeKind(StrEnum):
    SUCCESS = "success"
    SYNTAX_ERROR = "syntax_error"
    ID_ERROR = "id_error"
    # set by connectors when a change could not be persisted and was undone
    SAVE_ERROR = "save_error"


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """
    Result of one command, rendered verbatim by whatever UI is attached.

    `changed` is set only by successful commands that mutated the store;
    connectors use it to decide when to persist.
    """

    kind: OutcomeKind
    message: str
    lines: tuple[str, ...] = field(default=())
    changed: bool = False

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def render(self) -> str:
        return "\n".join((self.message, *self.lines))

    @classmethod
    def success(
        cls, message: str, lines: Sequence[str] = (), *, changed: bool = False
    ) -> CommandOutcome:
        return cls(OutcomeKind.SUCCESS, message, tuple(lines), changed)

    @classmethod
    def syntax_error(cls, usage: str) -> CommandOutcome:
        return cls(OutcomeKind.SYNTAX_ERROR, usage)

    @classmethod
    def id_error(cls) -> CommandOutcome:
        return cls(OutcomeKind.ID_ERROR, INVALID_ID_MESSAGE)


CommandHandler = Callable[[TaskStore, str], CommandOutcome]


class CommandRegistry:
    """Verb-based command registry ("delete 2", "find milk", ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, store: TaskStore, line: str) -> CommandOutcome:
        """
        Dispatch one raw input line.

        Always returns an outcome: store range errors become ID_ERROR here so
        they never leak past the command layer.
        """
        line = line.strip()
        if not line:
            return CommandOutcome.syntax_error("Empty command. Type \"help\" to list available commands.")

        name = line.split(maxsplit=1)[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return CommandOutcome.syntax_error(
                f"Unknown command: {name}. Type \"help\" to list available commands."
            )

        try:
            return handler(store, line)
        except TaskIdError as e:
            logger.debug("Command %r rejected: %s", name, e)
            return CommandOutcome.id_error()

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for help_text in self._help.values():
            lines.append(f"  {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _usage(syntax: str, example: str) -> str:
    return f'Invalid Syntax - "{syntax}" (e.g. "{example}")'


def _pattern(body: str) -> re.Pattern[str]:
    return re.compile(rf"^{body}$", re.IGNORECASE)


def _id_pattern(verb: str) -> re.Pattern[str]:
    return _pattern(rf"{verb}\s+(?P<id>\d+)")


TODO_RE = _pattern(r"todo\s+(?P<title>\S.*)")
DEADLINE_RE = _pattern(r"deadline\s+(?P<title>\S.*?)\s+/by\s+(?P<deadline>\S.*)")
EVENT_RE = _pattern(r"event\s+(?P<title>\S.*?)\s+/from\s+(?P<start>\S.*?)\s+/to\s+(?P<end>\S.*)")
LIST_RE = _pattern(r"(?:list|ls)")
HELP_RE = _pattern(r"(?:help|h|\?)")
FIND_RE = _pattern(r"find(?:\s+(?P<keyword>.*))?")
SHOW_RE = _id_pattern("show")
CHECK_RE = _id_pattern("check")
UNCHECK_RE = _id_pattern("uncheck")
DELETE_RE = _id_pattern("delete")


def render_numbered(numbered: Sequence[tuple[int, Task]]) -> list[str]:
    """"<id>. [ ] title" lines; ids are the tasks' current store positions."""
    return [f"{i}. {render_summary(t)}" for i, t in numbered]


def render_list(store: TaskStore) -> list[str]:
    """The whole store, numbered, or a placeholder line when empty."""
    if not len(store):
        return [EMPTY_LIST_MESSAGE]
    return [f"{i}. {s}" for i, s in enumerate(store.list_all(), start=1)]


def _added(store: TaskStore, task: Task) -> CommandOutcome:
    return CommandOutcome.success(
        "Added! The task has been added:",
        [render_summary(task), f"You now have {len(store)} task(s) in the list."],
        changed=True,
    )


def cmd_todo(store: TaskStore, line: str) -> CommandOutcome:
    m = TODO_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("todo [title]", "todo buy milk"))
    return _added(store, store.create(TaskKind.SIMPLE, m["title"].strip()))


def cmd_deadline(store: TaskStore, line: str) -> CommandOutcome:
    m = DEADLINE_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(
            _usage("deadline [title] /by [deadline]", "deadline submit report /by 2024-01-01")
        )
    task = store.create(TaskKind.DEADLINE, m["title"].strip(), deadline=m["deadline"].strip())
    return _added(store, task)


def cmd_event(store: TaskStore, line: str) -> CommandOutcome:
    m = EVENT_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(
            _usage(
                "event [title] /from [start] /to [end]",
                "event team sync /from 2024-01-01 10:00 /to 2024-01-01 11:00",
            )
        )
    task = store.create(
        TaskKind.EVENT, m["title"].strip(), start=m["start"].strip(), end=m["end"].strip()
    )
    return _added(store, task)


def cmd_list(store: TaskStore, line: str) -> CommandOutcome:
    if not LIST_RE.match(line):
        return CommandOutcome.syntax_error(_usage("list", "list"))
    return CommandOutcome.success("Here are your tasks:", render_list(store))


def cmd_show(store: TaskStore, line: str) -> CommandOutcome:
    m = SHOW_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("show [Task ID]", "show 1"))
    return CommandOutcome.success("Here is the task:", [store.list_one(int(m["id"]))])


def cmd_check(store: TaskStore, line: str) -> CommandOutcome:
    m = CHECK_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("check [Task ID]", "check 1"))
    task = store.set_completed(int(m["id"]))
    return CommandOutcome.success(
        "Nice! The task has been marked as completed:", [render_summary(task)], changed=True
    )


def cmd_uncheck(store: TaskStore, line: str) -> CommandOutcome:
    m = UNCHECK_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("uncheck [Task ID]", "uncheck 1"))
    task = store.set_new(int(m["id"]))
    return CommandOutcome.success(
        "OK! The task has been marked as not completed:", [render_summary(task)], changed=True
    )


def cmd_delete(store: TaskStore, line: str) -> CommandOutcome:
    """
    delete <id>

    On success the outcome also carries a re-render of the remaining tasks,
    numbered with their new (shifted) ids.
    """
    m = DELETE_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("delete [Task ID]", "delete 1"))
    task = store.delete(int(m["id"]))
    return CommandOutcome.success(
        "Deleted! The task has been deleted:",
        [render_summary(task), "", *render_list(store)],
        changed=True,
    )


def cmd_find(store: TaskStore, line: str) -> CommandOutcome:
    m = FIND_RE.match(line)
    if not m:
        return CommandOutcome.syntax_error(_usage("find [keyword]", "find milk"))
    keyword = m["keyword"] or ""
    found = store.find_with_ids(keyword)
    if not found:
        return CommandOutcome.success(f'No tasks match "{keyword}".')
    return CommandOutcome.success("Here are the matching tasks:", render_numbered(found))


def cmd_help(store: TaskStore, line: str) -> CommandOutcome:
    if not HELP_RE.match(line):
        return CommandOutcome.syntax_error(_usage("help", "help"))
    exit_line = f"  {' | '.join(EXIT_WORDS)} - save and quit."
    return CommandOutcome.success(registry.build_help(), [exit_line])


registry.register("todo", cmd_todo, help_text="todo <title> - add a simple task.")
registry.register(
    "deadline", cmd_deadline, help_text="deadline <title> /by <deadline> - add a task with a deadline."
)
registry.register(
    "event", cmd_event, help_text="event <title> /from <start> /to <end> - add a time-ranged event."
)
registry.register("list", cmd_list, help_text="list - show all tasks.", aliases=["ls"])
registry.register("show", cmd_show, help_text="show <id> - show one task.")
registry.register("check", cmd_check, help_text="check <id> - mark a task as completed.")
registry.register("uncheck", cmd_uncheck, help_text="uncheck <id> - mark a task as not completed.")
registry.register("delete", cmd_delete, help_text="delete <id> - delete a task (later ids shift down).")
registry.register("find", cmd_find, help_text="find <keyword> - list tasks whose title contains keyword.")
registry.register("help", cmd_help, help_text="help - show this help.", aliases=["h", "?"])
