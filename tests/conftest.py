# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from assignment_tracker.core.state import AppState
from assignment_tracker.tasks.task_store import JsonTaskStore

from .fakes import FakeClock, MemoryTaskRepo, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tracker-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks_v3.json",
        refresh_enabled=False,
        refresh_interval_seconds=60.0,
        default_priority="medium",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo() -> MemoryTaskRepo:
    return MemoryTaskRepo()


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock, repo: MemoryTaskRepo) -> AppState:
    """AppState wired with a fixed clock, sequential ids and an in-memory store."""
    return AppState(
        settings=settings,
        task_store=repo,
        clock=clock,
        id_factory=SequentialIds(),
    )


@pytest.fixture()
def json_state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState backed by the real JSON store.

    NOTE: the file store's round-trip is part of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=JsonTaskStore(settings.tasks_path),
        clock=clock,
        id_factory=SequentialIds(),
    )
