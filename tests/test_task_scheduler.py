# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
import io
import time

import pytest

from assignment_tracker.connectors.console_connector import ConsolePresenter
from assignment_tracker.tasks import task_api
from assignment_tracker.tasks.task_models import Bucket, TaskInput
from assignment_tracker.tasks.task_scheduler import (
    refresh_once,
    run_refresh_loop,
    start_refresh_in_background,
)

from .fakes import DAY, MINUTE, RecordingPresenter


def _add(state, due: str) -> str:
    res = task_api.add_assignment(state, TaskInput(title="Essay", due_date=due))
    assert res.ok
    return res.task_id or ""


def test_refresh_once_recomputes_for_current_day(state, clock) -> None:
    _add(state, "2026-10-20")
    presenter = RecordingPresenter()

    first = refresh_once(state, presenter)
    clock.advance(DAY)
    second = refresh_once(state, presenter)

    assert presenter.boards == [first, second]
    assert first.cards()[0].bucket == Bucket.SOON
    assert first.cards()[0].deadline.text == "Due tomorrow"
    assert second.cards()[0].bucket == Bucket.TODAY
    assert second.cards()[0].deadline.text == "Due today"


@pytest.mark.asyncio
async def test_refresh_loop_renders_until_cancelled(state, repo) -> None:
    _add(state, "2026-10-19")
    saves_before = repo.save_calls
    presenter = RecordingPresenter()

    runner = asyncio.create_task(run_refresh_loop(state, presenter, interval_seconds=0.01))

    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert presenter.boards, "Refresh loop should render at least once"
    assert presenter.boards[0].sections[Bucket.TODAY][0].task.title == "Essay"
    # read-only: nothing persisted, nothing mutated
    assert repo.save_calls == saves_before
    assert state.tasks[0].time_spent_ms == 0


@pytest.mark.asyncio
async def test_refresh_loop_survives_presenter_errors(state) -> None:
    calls = {"n": 0}
    stop = asyncio.Event()

    class FlakyPresenter:
        def render(self, board) -> None:
            calls["n"] += 1
            if calls["n"] == 1:
                raise RuntimeError("display went away")
            stop.set()

    await asyncio.wait_for(
        run_refresh_loop(state, FlakyPresenter(), interval_seconds=0.01, stop_event=stop),
        timeout=5.0,
    )

    assert calls["n"] == 2


def test_background_runner_starts_and_stops(state) -> None:
    presenter = RecordingPresenter()

    runner = start_refresh_in_background(state, presenter, interval_seconds=0.5)
    assert runner is not None

    deadline = time.monotonic() + 5.0
    while not presenter.boards and time.monotonic() < deadline:
        time.sleep(0.01)
    runner.stop()
    runner.join(timeout=5.0)

    assert not runner.thread.is_alive()
    assert len(presenter.boards) >= 1


def test_console_presenter_prints_only_when_labels_change(state, clock) -> None:
    _add(state, "2026-10-20")
    out = io.StringIO()
    presenter = ConsolePresenter(out)

    refresh_once(state, presenter)
    printed = out.getvalue()
    assert "Due tomorrow [warning]" in printed
    assert "Time: 0m" in printed

    clock.advance(5 * MINUTE)
    refresh_once(state, presenter)
    assert out.getvalue() == printed

    clock.advance(DAY)
    refresh_once(state, presenter)
    assert "Due today [warning]" in out.getvalue()[len(printed):]
