# src/assignment_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .task_models import TASK_SCHEMA_VERSION, Task, task_from_dict, task_to_dict

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    JSON file task store.

    The file holds an ordered JSON array of task records (camelCase keys).
    Reading is forgiving:
    - missing file -> no tasks
    - corrupt file / wrong top-level type -> no tasks (logged)
    - individual malformed records are skipped

    Writing is atomic (temp file + os.replace).
    """

    def __init__(self, path: str | Path = f"tasks_v{TASK_SCHEMA_VERSION}.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("TaskStore ready path=%s exists=%s", self._path, self._path.exists())

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.warning("Task file unreadable, starting empty: %s", self._path, exc_info=True)
            return []

        if not isinstance(data, list):
            logger.warning("Task file is not a list (got %s), starting empty", type(data).__name__)
            return []

        out: list[Task] = []
        skipped = 0
        for raw in data:
            task = task_from_dict(raw) if isinstance(raw, dict) else None
            if task is None:
                skipped += 1
                continue
            out.append(task)

        if skipped:
            logger.warning("Skipped %d malformed task records in %s", skipped, self._path)
        logger.debug("Loaded %d tasks from %s", len(out), self._path)
        return out

    def save(self, tasks: Sequence[Task]) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False, indent=2)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
            with contextlib.suppress(Exception):
                os.chmod(self._path, 0o600)
        except Exception:
            logger.exception("Failed to save %d tasks to %s", len(tasks), self._path)
            return False
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)
        return True

    def count(self) -> int:
        return len(self.load())
