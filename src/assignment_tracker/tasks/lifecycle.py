# src/assignment_tracker/tasks/lifecycle.py

from __future__ import annotations

"""
Task lifecycle.

Status model for time-on-task:
- Active:    completed is False, activated_at marks the start of the open session
- Completed: completed is True, completed_at marks the most recent completion

time_spent_ms accumulates across sessions and only grows on Active -> Completed.

Everything here is pure given `now` (epoch ms); no I/O, no clock reads.
"""

import logging
from dataclasses import replace

from .dates import parse_ymd
from .task_models import OpResult, Priority, Task, TaskError, TaskInput, TaskStatus

logger = logging.getLogger(__name__)


def normalize(task: Task, *, now: int) -> Task:
    """
    Repair metrics fields on a task loaded from an older schema.

    Status is the source of truth; the session timestamps are made to match it.
    Mutates and returns the same task.
    """
    if task.time_spent_ms is None or task.time_spent_ms < 0:
        task.time_spent_ms = 0

    if task.status == TaskStatus.ACTIVE:
        if task.activated_at is None:
            # Best-effort: start a session now rather than leave an active task untimed.
            task.activated_at = now
        task.completed_at = None
    else:
        task.activated_at = None

    return task


def apply_status(task: Task, target: TaskStatus | str, *, now: int) -> OpResult:
    """
    Move a task to `target`, applying timestamp and time-on-task side effects.

    - unknown target       -> INVALID_TRANSITION, task untouched
    - same status          -> no-op
    - Active -> Completed  -> close the session, add its (non-negative) length
    - Completed -> Active  -> open a new session, keep time_spent_ms
    """
    next_status = TaskStatus.parse(target)
    if next_status is None:
        logger.debug("Rejected status transition task_id=%s target=%r", task.id, target)
        return OpResult.fail(
            TaskError.INVALID_TRANSITION,
            f"Unknown status: {target!r}",
            task_id=task.id,
        )

    if task.status == next_status:
        return OpResult(ok=True, noop=True, status=next_status, task_id=task.id)

    if next_status == TaskStatus.ACTIVE:
        task.completed = False
        task.completed_at = None
        task.activated_at = now
        return OpResult(ok=True, status=TaskStatus.ACTIVE, task_id=task.id)

    task.completed = True
    if task.activated_at is not None:
        # Clock skew (now before activation) contributes nothing.
        task.time_spent_ms += max(0, now - task.activated_at)
    task.completed_at = now
    task.activated_at = None
    return OpResult(ok=True, status=TaskStatus.COMPLETED, task_id=task.id)


def toggle_task(task: Task, *, now: int) -> OpResult:
    target = TaskStatus.ACTIVE if task.completed else TaskStatus.COMPLETED
    return apply_status(task, target, now=now)


def elapsed(task: Task, at: int) -> int:
    """Accumulated time plus the open session up to `at`. Never mutates."""
    base = task.time_spent_ms or 0
    if task.status == TaskStatus.ACTIVE and task.activated_at is not None:
        return base + max(0, at - task.activated_at)
    return base


def validate_input(data: TaskInput) -> OpResult:
    """Input-time validation; runs before any mutation."""
    if not (data.title or "").strip():
        return OpResult.fail(TaskError.MISSING_REQUIRED_FIELD, "Title is required.")
    if not (data.due_date or "").strip():
        return OpResult.fail(TaskError.MISSING_REQUIRED_FIELD, "Due date is required.")
    if parse_ymd(data.due_date.strip()) is None:
        return OpResult.fail(TaskError.MALFORMED_DUE_DATE, "Due date is invalid.")
    if Priority.parse(data.priority) is None:
        return OpResult.fail(TaskError.INVALID_PRIORITY, "Priority must be low, medium or high.")
    return OpResult(ok=True)


def clean_input(data: TaskInput) -> TaskInput:
    """Trimmed copy of validated input."""
    return replace(
        data,
        title=data.title.strip(),
        due_date=data.due_date.strip(),
        priority=Priority.parse(data.priority) or Priority.MEDIUM,
        completed=bool(data.completed),
    )


def create_task(data: TaskInput, *, now: int, task_id: str) -> Task:
    """New task; the initial status comes from data.completed."""
    completed = bool(data.completed)
    return Task(
        id=task_id,
        title=data.title,
        due_date=data.due_date,
        priority=Priority.parse(data.priority) or Priority.MEDIUM,
        completed=completed,
        created_at=now,
        activated_at=None if completed else now,
        completed_at=now if completed else None,
        time_spent_ms=0,
    )


def update_task(task: Task, data: TaskInput, *, now: int) -> OpResult:
    """
    Overwrite editable fields, then apply the status delta.

    A completion flip made through an edit goes through apply_status, so it is
    timed exactly like an explicit toggle.
    """
    prev_status = task.status
    next_status = TaskStatus.COMPLETED if data.completed else TaskStatus.ACTIVE

    task.title = data.title
    task.due_date = data.due_date
    task.priority = Priority.parse(data.priority) or task.priority

    if prev_status != next_status:
        return apply_status(task, next_status, now=now)

    if next_status == TaskStatus.ACTIVE and task.activated_at is None:
        normalize(task, now=now)

    return OpResult(ok=True, status=next_status, task_id=task.id)
