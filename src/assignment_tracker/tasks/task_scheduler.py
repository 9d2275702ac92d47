# src/assignment_tracker/tasks/task_scheduler.py

from __future__ import annotations

"""
Refresh loop.

A small polling loop that, on every tick:
- snapshots the task collection,
- rebuilds the board view for the current day,
- hands it to the injected presenter.

It never writes task data; labels like "Due tomorrow" advance only because
the view is recomputed against a later clock reading.
"""

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from ..core.ports import Presenter
from ..core.state import AppState
from .categorize import BoardView, build_board
from .dates import local_today

logger = logging.getLogger(__name__)


def refresh_once(state: AppState, presenter: Presenter) -> BoardView:
    now = state.now()
    board = build_board(state.snapshot(), today=local_today(now), now=now)
    presenter.render(board)
    return board


async def run_refresh_loop(
        state: AppState,
        presenter: Presenter,
        *,
        interval_seconds: float = 60.0,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Re-render every interval_seconds until cancelled (or stop_event is set).

    A failing tick is logged and the loop keeps going.
    """
    sleep_s = max(0.5, float(interval_seconds))

    while stop_event is None or not stop_event.is_set():
        try:
            board = refresh_once(state, presenter)
            logger.debug("Refresh tick today=%s cards=%d", board.today, len(board.cards()))
        except Exception:
            logger.exception("Refresh tick failed")

        if stop_event is None:
            await asyncio.sleep(sleep_s)
            continue

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass(slots=True)
class RefreshBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal refresh stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_refresh_in_background(
        state: AppState,
        presenter: Presenter,
        *,
        interval_seconds: float = 60.0,
) -> RefreshBackgroundRunner | None:
    """
    Run the refresh loop in a background thread with its own event loop
    (the console REPL blocks on input()).
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_refresh_loop(
                    state, presenter, interval_seconds=interval_seconds, stop_event=stop_event
                )
            )
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="refresh-loop", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Refresh thread did not initialize properly.")
        return None

    logger.info("Refresh loop started (every %.0fs).", max(0.5, float(interval_seconds)))
    return RefreshBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
