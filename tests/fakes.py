# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from assignment_tracker.tasks.categorize import BoardView
from assignment_tracker.tasks.task_models import Priority, Task

# Local noon keeps "today" stable whatever the machine's timezone.
NOON = int(datetime(2026, 10, 19, 12, 0).timestamp() * 1000)
MINUTE = 60_000
DAY = 24 * 60 * MINUTE


class FakeClock:
    """Deterministic epoch-ms clock; advance() moves it forward (or back)."""

    def __init__(self, now: int = NOON) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class SequentialIds:
    def __init__(self, prefix: str = "task") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}-{self.n:04d}"


@dataclass(slots=True)
class RecordingPresenter:
    """Presenter that keeps every board it was given."""

    boards: list[BoardView] = field(default_factory=list)

    def render(self, board: BoardView) -> None:
        self.boards.append(board)


class MemoryTaskRepo:
    """
    In-memory TaskRepo.

    Stores copies so tests can tell saved state apart from live state.
    """

    def __init__(self, tasks: Sequence[Task] = (), *, fail_saves: bool = False) -> None:
        self.saved: list[Task] = [replace(t) for t in tasks]
        self.fail_saves = fail_saves
        self.save_calls = 0

    def load(self) -> list[Task]:
        return [replace(t) for t in self.saved]

    def save(self, tasks: Sequence[Task]) -> bool:
        self.save_calls += 1
        if self.fail_saves:
            return False
        self.saved = [replace(t) for t in tasks]
        return True


def make_task(**overrides) -> Task:
    """Active medium-priority task due "today" (2026-10-19), activated at NOON."""
    fields = dict(
        id="t1",
        title="Essay draft",
        due_date="2026-10-19",
        priority=Priority.MEDIUM,
        completed=False,
        created_at=NOON,
        activated_at=NOON,
        completed_at=None,
        time_spent_ms=0,
    )
    fields.update(overrides)
    return Task(**fields)
