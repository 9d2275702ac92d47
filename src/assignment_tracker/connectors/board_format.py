# src/assignment_tracker/connectors/board_format.py

from __future__ import annotations

from ..tasks.categorize import BUCKET_TITLES, BoardView, TaskCard, format_duration
from ..tasks.task_models import Bucket

SHORT_ID_LEN = 8


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LEN]


def format_card(card: TaskCard, *, show_time: bool = True) -> str:
    t = card.task
    badges = [
        f"{card.deadline.text} [{card.deadline.urgency}]",
        f"Priority: {t.priority.value.capitalize()}",
        f"Status: {card.bucket.value.capitalize()}",
    ]
    if show_time:
        badges.append(f"Time: {format_duration(card.elapsed_ms)}")
    if card.bucket == Bucket.OVERDUE:
        # Text marker so overdue is visible without color.
        badges.insert(0, "OVERDUE")
    mark = "x" if t.completed else " "
    return (
        f"  [{mark}] {short_id(t.id)}  {t.title}\n"
        f"        {card.due_label} | " + " | ".join(badges)
    )


def format_board(board: BoardView, *, show_time: bool = True) -> str:
    lines: list[str] = []
    for bucket in Bucket:
        cards = board.sections.get(bucket, [])
        lines.append(f"== {BUCKET_TITLES[bucket]} ({len(cards)}) ==")
        if not cards:
            lines.append("  No items.")
        for card in cards:
            lines.append(format_card(card, show_time=show_time))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
