"""Current time for record stamping and day defaults.

Every per-day key is derived from the UTC calendar day, so the CLI's
default ``--date`` and the timestamps on stored records both come from here.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """The current UTC calendar day."""
    return utc_now().date()


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
