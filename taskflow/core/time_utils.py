"""
Time helpers. All timestamps are stored and compared in UTC.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Single source of truth for "now"."""
    return datetime.now(timezone.utc)


def days_ago(days: int) -> datetime:
    return utc_now() - timedelta(days=days)


def as_utc(value: datetime) -> datetime:
    """Normalise a stored timestamp to UTC; naive values (SQLite) are already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
