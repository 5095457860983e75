# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import SortKey, Task
from .bootstrap import save_tasks

TIMED_SEPARATOR = "|"
LITERAL_PREFIX = "//"

logger = logging.getLogger(__name__)


class CommandArgs(list[str]):
    """Whitespace-split arguments that also keep the untouched text after the command name."""

    def __init__(self, raw: str = "") -> None:
        super().__init__(raw.split())
        self.raw = raw


CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, CommandArgs], str]
CommandHandler3 = Callable[[AppState, CommandArgs, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(None, 1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = CommandArgs(parts[1] if len(parts) > 1 else "")

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Save and quit.")
        lines.append("Any line that is not a command is added as a new task.")
        lines.append(
            f"Start a line with {LITERAL_PREFIX} to add a task beginning with / "
            f"(e.g. {LITERAL_PREFIX}etc backup)."
        )
        return "\n".join(lines)


registry = CommandRegistry()


# ---- presentation ----


def format_task(task: Task) -> str:
    mark = "[X]" if task.completed else "[ ]"
    line = f"{mark} ID {task.id}: {task.description}"
    if task.is_timed:
        line += f" (due: {task.deadline})"
    return line


def render_list(tasks: tuple[Task, ...]) -> str:
    if not tasks:
        return "No tasks found."
    lines = ["--- TO-DO LIST ---"]
    lines.extend(format_task(t) for t in tasks)
    lines.append("------------------")
    return "\n".join(lines)


def add_task_from_line(state: AppState, text: str) -> str:
    task_id = state.store.add(text)
    state.dirty = True
    return f"Task added successfully! (ID: {task_id})"


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: CommandArgs) -> str:
    return add_task_from_line(state, args.raw)


def cmd_timed(state: AppState, args: CommandArgs) -> str:
    """
    /timed <deadline> | <description>
    /timed <deadline-word> <description>   (no separator: first word is the deadline)
    """
    if not args:
        return "Usage: /timed <deadline> | <description>"

    if TIMED_SEPARATOR in args.raw:
        deadline, _, description = args.raw.partition(TIMED_SEPARATOR)
        deadline, description = deadline.strip(), description.strip()
    else:
        head = args.raw.split(None, 1)
        deadline, description = head[0], (head[1] if len(head) > 1 else "")

    if not deadline:
        return "Usage: /timed <deadline> | <description>"

    task_id = state.store.add_timed(description, deadline)
    state.dirty = True
    return f"Task added successfully! (ID: {task_id}, due: {deadline})"


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    if not state.store.complete(task_id):
        return "Task ID not found."
    state.dirty = True
    return f"Task {task_id} marked as done."


def cmd_undo(state: AppState, args: list[str]) -> str:
    removed = state.store.undo()
    if removed is None:
        return "Nothing to undo."
    state.dirty = True
    return f"Undone: Removed task {removed}"


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state.store.list())


def cmd_sort(state: AppState, args: list[str]) -> str:
    try:
        key = SortKey.parse(args[0] if args else None)
    except ValueError:
        choices = " | ".join(k.value for k in SortKey)
        return f"Usage: /sort [{choices}]"
    state.store.sort(key)
    state.dirty = True
    return f"Tasks sorted by {key.value}.\n{render_list(state.store.list())}"


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit is not None:
        emit(f"Saving to {state.codec.path} ...")
    if not save_tasks(state):
        return f"Could not save tasks to {state.codec.path} (see log for details)."
    return f"Saved {len(state.store)} tasks to {state.codec.path}."


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    pending = sum(1 for t in store.list() if not t.completed)
    return (
        "Status:\n"
        f"  File: {state.codec.path}\n"
        f"  Tasks: {len(store)} ({pending} open)\n"
        f"  Next id: {store.next_id}\n"
        f"  Undo depth: {store.undo_depth}\n"
        f"  Unsaved changes: {'yes' if state.dirty else 'no'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <description>.", aliases=["a"])
registry.register(
    "timed",
    cmd_timed,
    help_text="Add a task with a deadline: /timed <deadline> | <description>.",
    aliases=["t"],
)
registry.register("done", cmd_done, help_text="Mark a task done: /done <id>.", aliases=["d", "complete"])
registry.register("undo", cmd_undo, help_text="Remove the most recently added task.", aliases=["u"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["l", "ls"])
registry.register("sort", cmd_sort, help_text="Reorder tasks: /sort id | /sort status.")
registry.register("save", cmd_save, help_text="Write tasks to disk now.")
registry.register("status", cmd_status, help_text="Show file path, counts and undo depth.")
