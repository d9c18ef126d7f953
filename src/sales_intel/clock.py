"""Time helpers for recency windows.  Naive datetimes are treated as UTC."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_within_days(moment: datetime, days: int, now: datetime) -> bool:
    """True when *moment* is at or after ``now - days`` (inclusive boundary)."""
    return as_utc(moment) >= as_utc(now) - timedelta(days=days)
