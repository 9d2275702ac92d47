# src/assignment_tracker/core/state.py

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from ..tasks.dates import local_today
from ..tasks.task_models import Task
from .ports import Clock, IdFactory, TaskRepo


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass
class AppState:
    """
    Application state shared by the console and the refresh loop.

    `tasks` is the single task collection (insertion order, no meaning).
    Only task_api writes to it; readers take a snapshot under `lock`.
    """

    # Settings object (config.Settings or a test double).
    settings: Any
    task_store: TaskRepo

    tasks: list[Task] = field(default_factory=list)
    clock: Clock = wall_clock_ms
    id_factory: IdFactory = new_task_id
    lock: threading.RLock = field(default_factory=threading.RLock)

    def now(self) -> int:
        return int(self.clock())

    def today(self) -> date:
        return local_today(self.now())

    def snapshot(self) -> list[Task]:
        with self.lock:
            return [replace(t) for t in self.tasks]
