"""
Time helpers shared across the application.

Single source of truth for "now in UTC" as a naive datetime (DB/comparison
compatibility). Use utcnow_naive() inline; for column defaults use the
callable: default=utcnow_naive, onupdate=utcnow_naive.
"""

from datetime import date, datetime, timedelta, timezone


def utcnow_naive() -> datetime:
    """
    Return a naive UTC datetime.

    Use this instead of deprecated datetime.utcnow(). Preserves existing
    storage/comparison semantics for naive UTC values.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_date(value) -> date:
    """
    Calendar date in UTC for a date, datetime or ISO 'YYYY-MM-DD...' string.

    Datetimes are normalised to UTC first so a late-evening local timestamp
    does not land on the wrong day.
    """
    if isinstance(value, datetime):
        return to_naive_utc(value).date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def subtract_days_utc(now: datetime, days: int) -> date:
    """UTC calendar date `days` days before `now`."""
    return utc_date(now) - timedelta(days=days)
