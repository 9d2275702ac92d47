# src/assignment_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from typing import TextIO

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.categorize import BoardView
from ..tasks.task_scheduler import refresh_once
from .board_format import format_board

logger = logging.getLogger(__name__)

READ_ONLY_COMMANDS = frozenset({"list", "ls", "help", "h", "?", "show", "status"})


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsolePresenter:
    """
    Prints the board to a text stream.

    Periodic refreshes call render() every tick; the board is printed only when
    its labels differ from the last one printed, so labels still advance (e.g.
    after midnight) without flooding the prompt.
    """

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._last: str | None = None
        self._lock = threading.Lock()

    def render(self, board: BoardView) -> None:
        # Elapsed time ticks every minute; only label or membership changes reprint.
        key = format_board(board, show_time=False)
        text = format_board(board)
        with self._lock:
            if key == self._last:
                return
            self._last = key
            self._out.write(f"\n[{_ts_local()}] Board ({board.today.isoformat()}):\n{text}")
            self._out.flush()


def run_console_loop(state: AppState, presenter: ConsolePresenter) -> None:
    logger.info("Console started (%d tasks).", len(state.tasks))
    print(f"[{_ts_local()}] [CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    refresh_once(state, presenter)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            user_input = "/" + user_input

        try:
            reply = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            print(f"[{_ts_local()}] {reply}")

        # Mutations re-render right away.
        name = user_input[1:].split(maxsplit=1)[0].lower() if len(user_input) > 1 else ""
        if name not in READ_ONLY_COMMANDS:
            refresh_once(state, presenter)

    logger.info("Console finished.")
