# src/assignment_tracker/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..connectors.board_format import format_board, short_id
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.categorize import build_board, categorize, format_duration, task_summary
from ..tasks.lifecycle import elapsed
from ..tasks.task_models import Bucket, Priority, TaskError, TaskInput, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
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
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_id(state: AppState, token: str) -> tuple[str | None, str | None]:
    """
    Map a full id or unique id prefix to a task id.

    Returns (task_id, None) or (None, error message). An unknown token is passed
    through unchanged so the core reports it as not found.
    """
    token = token.strip()
    if not token:
        return None, "Missing task id."
    matches = [t.id for t in state.snapshot() if t.id == token or t.id.startswith(token)]
    if token in matches:
        return token, None
    if len(matches) > 1:
        return None, f"Ambiguous id prefix {token!r} ({len(matches)} matches)."
    if matches:
        return matches[0], None
    return token, None


def _default_priority(state: AppState) -> str:
    return str(getattr(state.settings, "default_priority", Priority.MEDIUM.value))


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    now = state.now()
    board = build_board(state.snapshot(), today=state.today(), now=now)
    return format_board(board)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <YYYY-MM-DD> [low|medium|high] [--done] <title...>
    """
    if not args:
        return "Usage: /add <YYYY-MM-DD> [low|medium|high] [--done] <title...>"

    due_date, rest = args[0], list(args[1:])
    completed = "--done" in rest
    rest = [a for a in rest if a != "--done"]

    priority = _default_priority(state)
    if rest and Priority.parse(rest[0]) is not None:
        priority = rest.pop(0)

    res = task_api.add_assignment(
        state,
        TaskInput(title=" ".join(rest), due_date=due_date, priority=priority, completed=completed),
    )
    if not res.ok:
        return res.message
    return f"{res.message} (id {short_id(res.task_id or '')})"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> <YYYY-MM-DD> <low|medium|high> <open|done> <title...>
    """
    if len(args) < 4:
        return "Usage: /edit <id> <YYYY-MM-DD> <low|medium|high> <open|done> <title...>"

    task_id, err = resolve_task_id(state, args[0])
    if err:
        return err

    flag = args[3].lower()
    if flag not in ("open", "done"):
        return "Completion must be 'open' or 'done'."

    res = task_api.edit_assignment(
        state,
        task_id or "",
        TaskInput(
            title=" ".join(args[4:]),
            due_date=args[1],
            priority=args[2],
            completed=flag == "done",
        ),
    )
    if res.error == TaskError.NOT_FOUND:
        return "Assignment not found."
    return res.message


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    task_id, err = resolve_task_id(state, args[0])
    if err:
        return err

    res = task_api.toggle_assignment(state, task_id or "")
    if res.ok and not res.noop:
        return "Marked completed." if res.status == TaskStatus.COMPLETED else "Marked open."
    return "Status update ignored."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <id>"
    task_id, err = resolve_task_id(state, args[0])
    if err:
        return err

    res = task_api.delete_assignment(state, task_id or "")
    return res.message if res.ok else "Assignment not found."


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /clear      -> ask for confirmation
    /clear yes  -> delete every assignment
    """
    if not args or args[0].lower() != "yes":
        return "Clear ALL assignments? This cannot be undone. Use /clear yes to confirm."

    if emit:
        with contextlib.suppress(Exception):
            emit(f"Clearing {len(state.tasks)} assignments...")

    return task_api.clear_assignments(state).message


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    task_id, err = resolve_task_id(state, args[0])
    if err:
        return err

    task = next((t for t in state.snapshot() if t.id == task_id), None)
    if task is None:
        return "Assignment not found."

    now = state.now()
    return (
        f"{task_summary(task, state.today())}\n"
        f"  id: {task.id}\n"
        f"  time on task: {format_duration(elapsed(task, now))}"
    )


def cmd_status(state: AppState, args: list[str]) -> str:
    today = state.today()
    counts = {b: 0 for b in Bucket}
    for t in state.snapshot():
        counts[categorize(t, today)] += 1

    store_path = getattr(state.task_store, "path", None)
    interval = getattr(state.settings, "refresh_interval_seconds", None)
    lines = ["Status:", f"  Today: {today.isoformat()}"]
    lines.extend(f"  {b.value.capitalize()}: {counts[b]}" for b in Bucket)
    if store_path is not None:
        lines.append(f"  Store: {store_path}")
    if interval is not None:
        lines.append(f"  Refresh every: {float(interval):.0f}s")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the board.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add an assignment: /add <YYYY-MM-DD> [low|medium|high] [--done] <title...>",
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit: /edit <id> <YYYY-MM-DD> <priority> <open|done> <title...>",
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete an assignment: /del <id>", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all assignments: /clear yes")
registry.register("show", cmd_show, help_text="Show one assignment: /show <id>")
registry.register("status", cmd_status, help_text="Show bucket counts and settings.")
