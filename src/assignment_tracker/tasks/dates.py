# src/assignment_tracker/tasks/dates.py

"""Calendar-day helpers. All arithmetic is on dates; time of day never enters."""

from __future__ import annotations

from datetime import date, datetime


def parse_ymd(text: object) -> date | None:
    """
    Strictly parse "YYYY-MM-DD".

    Rejects anything that is not three integer components forming a real
    calendar date ("2026-02-30" is invalid, not March 2nd).
    """
    if not text or not isinstance(text, str):
        return None
    parts = text.split("-")
    if len(parts) != 3:
        return None
    # Plain ASCII digits only; int() also takes underscores and Unicode digits.
    if not all(p.isascii() and p.isdigit() for p in parts):
        return None
    y, m, d = (int(p) for p in parts)
    try:
        return date(y, m, d)
    except ValueError:
        return None


def local_today(now_ms: int) -> date:
    """Local calendar day containing the epoch-ms instant."""
    return datetime.fromtimestamp(now_ms / 1000).date()


def diff_days(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (end - start).days
