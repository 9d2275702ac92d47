# src/assignment_tracker/tasks/task_api.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.state import AppState
from . import lifecycle
from .task_models import OpResult, Task, TaskError, TaskInput

logger = logging.getLogger(__name__)


def _persist(state: AppState) -> None:
    if not state.task_store.save(state.tasks):
        logger.warning("Task changes kept in memory only (save failed).")


def _not_found(task_id: str) -> OpResult:
    logger.debug("Task id=%s not found; ignoring", task_id)
    return OpResult(ok=False, noop=True, error=TaskError.NOT_FOUND, task_id=task_id)


def find_task(state: AppState, task_id: str) -> Task | None:
    for t in state.tasks:
        if t.id == task_id:
            return t
    return None


def add_assignment(state: AppState, data: TaskInput) -> OpResult:
    check = lifecycle.validate_input(data)
    if not check.ok:
        return check

    with state.lock:
        task = lifecycle.create_task(
            lifecycle.clean_input(data), now=state.now(), task_id=state.id_factory()
        )
        state.tasks.append(task)
        _persist(state)

    logger.info(
        "Task added id=%s due=%s priority=%s status=%s",
        task.id,
        task.due_date,
        task.priority.value,
        task.status.value,
    )
    return OpResult(ok=True, status=task.status, task_id=task.id, message="Assignment added.")


def edit_assignment(state: AppState, task_id: str, data: TaskInput) -> OpResult:
    check = lifecycle.validate_input(data)
    if not check.ok:
        return replace(check, task_id=task_id)

    with state.lock:
        task = find_task(state, task_id)
        if task is None:
            return _not_found(task_id)
        res = lifecycle.update_task(task, lifecycle.clean_input(data), now=state.now())
        if res.ok:
            _persist(state)

    logger.info("Task updated id=%s status=%s", task_id, task.status.value)
    return OpResult(ok=res.ok, status=res.status, error=res.error, task_id=task_id,
                    message="Assignment updated." if res.ok else res.message)


def toggle_assignment(state: AppState, task_id: str) -> OpResult:
    with state.lock:
        task = find_task(state, task_id)
        if task is None:
            return _not_found(task_id)
        res = lifecycle.toggle_task(task, now=state.now())
        if res.ok:
            _persist(state)

    if res.ok and not res.noop:
        logger.info("Task %s -> %s (time_spent_ms=%s)", task_id, task.status.value, task.time_spent_ms)
    return res


def delete_assignment(state: AppState, task_id: str) -> OpResult:
    with state.lock:
        before = len(state.tasks)
        state.tasks[:] = [t for t in state.tasks if t.id != task_id]
        if len(state.tasks) == before:
            return _not_found(task_id)
        _persist(state)

    logger.info("Task deleted id=%s", task_id)
    return OpResult(ok=True, task_id=task_id, message="Assignment deleted.")


def clear_assignments(state: AppState) -> OpResult:
    with state.lock:
        removed = len(state.tasks)
        state.tasks.clear()
        _persist(state)

    logger.info("Cleared %d tasks", removed)
    return OpResult(ok=True, noop=removed == 0, message="All assignments cleared.")
