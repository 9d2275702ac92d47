# src/assignment_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the JSON store, clock and id source into AppState,
- loads and normalizes stored tasks (once, before any command runs).
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.ports import Clock, IdFactory, TaskRepo
from ..core.state import AppState, new_task_id, wall_clock_ms
from ..tasks.lifecycle import normalize
from ..tasks.task_models import Task
from ..tasks.task_store import JsonTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.tasks_path).parent.mkdir(parents=True, exist_ok=True)


def load_tasks(store: TaskRepo, *, now: int) -> list[Task]:
    """Load tasks and bring every record up to the current schema."""
    try:
        tasks = store.load()
    except Exception:
        logger.exception("Task store load failed; starting with no tasks.")
        return []
    for t in tasks:
        normalize(t, now=now)
    logger.info("Loaded %d tasks", len(tasks))
    return tasks


def create_initial_state(
    *,
    settings=None,
    store: TaskRepo | None = None,
    clock: Clock = wall_clock_ms,
    id_factory: IdFactory = new_task_id,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store / clock) injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = JsonTaskStore(settings.tasks_path)

    return AppState(
        settings=settings,
        task_store=store,
        tasks=load_tasks(store, now=int(clock())),
        clock=clock,
        id_factory=id_factory,
    )
