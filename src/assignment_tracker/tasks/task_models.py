# src/assignment_tracker/tasks/task_models.py

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# Bumped whenever the persisted record shape changes; normalization on load
# brings older records up to this shape.
TASK_SCHEMA_VERSION = 3


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Derived from `Task.completed`; both states are reversible.
    """

    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def score(self) -> int:
        return _PRIORITY_SCORE[self]

    @classmethod
    def parse(cls, raw: Any) -> Priority | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


_PRIORITY_SCORE = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


class Bucket(StrEnum):
    """Urgency category used for display grouping (declaration order = display order)."""

    OVERDUE = "overdue"
    TODAY = "today"
    SOON = "soon"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class Urgency(StrEnum):
    SAFE = "safe"
    WARNING = "warning"
    OVERDUE = "overdue"
    DONE = "done"


class TaskError(StrEnum):
    INVALID_TRANSITION = "invalid_transition"
    MALFORMED_DUE_DATE = "malformed_due_date"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_PRIORITY = "invalid_priority"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class Task:
    id: str
    title: str
    due_date: str
    priority: Priority
    completed: bool
    created_at: int

    # Metrics (epoch ms). Exactly one of activated_at / completed_at is set.
    activated_at: int | None = None
    completed_at: int | None = None
    time_spent_ms: int = 0

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.ACTIVE


@dataclass(slots=True, frozen=True)
class TaskInput:
    """Form-level input for create/edit."""

    title: str
    due_date: str
    priority: Priority | str = Priority.MEDIUM
    completed: bool = False


@dataclass(slots=True, frozen=True)
class OpResult:
    """
    Structured outcome of a core operation.

    Domain errors are reported here instead of raised:
    - ok=False, error=...  -> rejected, nothing changed
    - ok=True,  noop=True  -> accepted but nothing to do
    """

    ok: bool
    noop: bool = False
    status: TaskStatus | None = None
    error: TaskError | None = None
    message: str = ""
    task_id: str | None = None

    @classmethod
    def fail(cls, error: TaskError, message: str = "", *, task_id: str | None = None) -> OpResult:
        return cls(ok=False, error=error, message=message, task_id=task_id)


@dataclass(slots=True, frozen=True)
class DeadlineInfo:
    text: str
    urgency: Urgency


# ---- (de)serialization ----


def _as_instant(value: Any) -> int | None:
    """Epoch-ms value or None when missing / not a finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "dueDate": task.due_date,
        "priority": task.priority.value,
        "completed": task.completed,
        "createdAt": task.created_at,
        "activatedAt": task.activated_at,
        "completedAt": task.completed_at,
        "timeSpentMs": task.time_spent_ms,
    }


def task_from_dict(raw: Mapping[str, Any]) -> Task | None:
    """
    Build a Task from a stored record.

    Missing or wrongly-typed fields are defaulted; run normalize() afterwards
    to restore the metrics invariants. Returns None if the record has no id.
    """
    task_id = raw.get("id")
    if isinstance(task_id, bool) or not isinstance(task_id, (str, int)):
        return None
    task_id = str(task_id).strip()
    if not task_id:
        return None

    title = raw.get("title")
    due_date = raw.get("dueDate")
    spent = _as_instant(raw.get("timeSpentMs"))

    return Task(
        id=task_id,
        title=title if isinstance(title, str) else "",
        due_date=due_date if isinstance(due_date, str) else "",
        # Unrecognized priorities rank lowest.
        priority=Priority.parse(raw.get("priority")) or Priority.LOW,
        completed=bool(raw.get("completed", False)),
        created_at=_as_instant(raw.get("createdAt")) or 0,
        activated_at=_as_instant(raw.get("activatedAt")),
        completed_at=_as_instant(raw.get("completedAt")),
        time_spent_ms=spent if spent is not None else 0,
    )
