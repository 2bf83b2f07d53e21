"""Consecutive-day streak counting."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Union


def as_day(value: Union[date, datetime]) -> date:
    """Truncate a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_streak(days: Iterable[Union[date, datetime]], start: Union[date, datetime]) -> int:
    """Count consecutive days with activity, walking backward from start.

    The walk begins on ``start`` itself, so no activity on ``start`` means a
    streak of 0 regardless of earlier days.

    Args:
        days: Days (or timestamps) with at least one qualifying record
        start: Reference day, truncated to the calendar day

    Returns:
        Number of consecutive active days ending at start
    """
    active = {as_day(d) for d in days}
    current = as_day(start)
    streak = 0
    while current in active:
        streak += 1
        current -= timedelta(days=1)
    return streak
