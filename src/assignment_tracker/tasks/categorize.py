# src/assignment_tracker/tasks/categorize.py

"""
Deadline categorization and ordering.

Nothing computed here is stored: buckets, labels and order are derived from
(task, today) on every call, so they advance on their own as days pass.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .dates import diff_days, parse_ymd
from .lifecycle import elapsed
from .task_models import Bucket, DeadlineInfo, Priority, Task, Urgency

SOON_WINDOW_DAYS = 7
WARNING_WINDOW_DAYS = 3

BUCKET_TITLES: dict[Bucket, str] = {
    Bucket.OVERDUE: "OVERDUE",
    Bucket.TODAY: "TODAY",
    Bucket.SOON: "DUE SOON",
    Bucket.UPCOMING: "UPCOMING",
    Bucket.COMPLETED: "COMPLETED",
}


def categorize(task: Task, today: date) -> Bucket:
    if task.completed:
        return Bucket.COMPLETED

    due = parse_ymd(task.due_date)
    if due is None:
        # Bad data never blocks; it just sinks into upcoming.
        return Bucket.UPCOMING

    delta = diff_days(today, due)
    if delta < 0:
        return Bucket.OVERDUE
    if delta == 0:
        return Bucket.TODAY
    if delta <= SOON_WINDOW_DAYS:
        return Bucket.SOON
    return Bucket.UPCOMING


def _days(n: int) -> str:
    return "day" if n == 1 else "days"


def describe_deadline(task: Task, today: date) -> DeadlineInfo:
    """Countdown label + urgency tag, finer-grained than the bucket."""
    if task.completed:
        return DeadlineInfo("Completed", Urgency.DONE)

    due = parse_ymd(task.due_date)
    if due is None:
        return DeadlineInfo("Due date invalid", Urgency.SAFE)

    delta = diff_days(today, due)
    if delta < 0:
        late = -delta
        return DeadlineInfo(f"Overdue by {late} {_days(late)}", Urgency.OVERDUE)
    if delta == 0:
        return DeadlineInfo("Due today", Urgency.WARNING)
    if delta == 1:
        return DeadlineInfo("Due tomorrow", Urgency.WARNING)
    if delta <= WARNING_WINDOW_DAYS:
        return DeadlineInfo(f"Due in {delta} {_days(delta)}", Urgency.WARNING)
    return DeadlineInfo(f"Due in {delta} {_days(delta)}", Urgency.SAFE)


def _priority_score(task: Task) -> int:
    p = Priority.parse(task.priority)
    return p.score if p is not None else Priority.LOW.score


def compare_tasks(a: Task, b: Task) -> int:
    """
    Total order within a bucket:
    1) higher priority first
    2) earlier valid due date first; valid dates before missing/invalid ones
    3) earlier created_at first
    """
    p_diff = _priority_score(b) - _priority_score(a)
    if p_diff != 0:
        return p_diff

    ad = parse_ymd(a.due_date)
    bd = parse_ymd(b.due_date)
    if ad is not None and bd is not None:
        d_diff = diff_days(bd, ad)
        if d_diff != 0:
            return d_diff
    elif ad is not None:
        return -1
    elif bd is not None:
        return 1

    return (a.created_at or 0) - (b.created_at or 0)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=functools.cmp_to_key(compare_tasks))


def bucket_tasks(tasks: Iterable[Task], today: date) -> dict[Bucket, list[Task]]:
    buckets: dict[Bucket, list[Task]] = {b: [] for b in Bucket}
    for t in tasks:
        buckets[categorize(t, today)].append(t)
    return {b: sort_tasks(items) for b, items in buckets.items()}


# ---- display helpers ----


def format_due(due_date: str) -> str:
    d = parse_ymd(due_date)
    if d is None:
        return "Due: (invalid)"
    return f"Due: {d.strftime('%b')} {d.day}, {d.year}"


def format_duration(ms: int) -> str:
    minutes = max(0, int(ms)) // 60_000
    days, rem = divmod(minutes, 24 * 60)
    hours, mins = divmod(rem, 60)
    if days:
        return f"{days}d {hours:02d}h {mins:02d}m"
    if hours:
        return f"{hours}h {mins:02d}m"
    return f"{mins}m"


def task_summary(task: Task, today: date) -> str:
    """Single-sentence description of a task, suitable for screen readers or logs."""
    bucket = categorize(task, today)
    due = format_due(task.due_date).replace("Due: ", "Due ")
    deadline = describe_deadline(task, today).text
    completion = "Completed" if task.completed else "Not completed"
    return (
        f"{task.title}. {deadline}. {due}. Priority {task.priority}. "
        f"Status {bucket}. {completion}."
    )


@dataclass(slots=True, frozen=True)
class TaskCard:
    task: Task
    bucket: Bucket
    deadline: DeadlineInfo
    due_label: str
    elapsed_ms: int


@dataclass(slots=True, frozen=True)
class BoardView:
    today: date
    now: int
    sections: dict[Bucket, list[TaskCard]] = field(default_factory=dict)

    def cards(self) -> list[TaskCard]:
        return [c for b in Bucket for c in self.sections.get(b, [])]


def build_board(tasks: Iterable[Task], *, today: date, now: int) -> BoardView:
    """Bucketed, sorted cards for presentation."""
    sections: dict[Bucket, list[TaskCard]] = {}
    for bucket, items in bucket_tasks(tasks, today).items():
        sections[bucket] = [
            TaskCard(
                task=t,
                bucket=bucket,
                deadline=describe_deadline(t, today),
                due_label=format_due(t.due_date),
                elapsed_ms=elapsed(t, now),
            )
            for t in items
        ]
    return BoardView(today=today, now=now, sections=sections)
