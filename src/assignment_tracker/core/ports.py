# src/assignment_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the clock, id source, storage and display swappable and makes
testing deterministic.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.categorize import BoardView
    from ..tasks.task_models import Task


class Clock(Protocol):
    """Returns the current instant in epoch milliseconds."""
    def __call__(self) -> int: ...


class IdFactory(Protocol):
    """Returns a new unique opaque id on every call."""
    def __call__(self) -> str: ...


class TaskRepo(Protocol):
    """
    Persistence port.

    load() must not raise on missing or corrupt data; it returns [] instead.
    save() reports failure as False.
    """

    def load(self) -> list[Task]: ...
    def save(self, tasks: Sequence[Task]) -> bool: ...


class Presenter(Protocol):
    """Display port: receives freshly computed board views."""
    def render(self, board: BoardView) -> None: ...
