"""
Clock helpers.

All timestamps are stored as naive UTC so values read back from SQLite compare
cleanly with freshly generated ones.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def calendar_date(value: Union[datetime, date]) -> date:
    """Drop the time-of-day component."""
    if isinstance(value, datetime):
        return to_naive_utc(value).date()  # type: ignore
    return value


def days_between(earlier: Union[datetime, date], later: Union[datetime, date]) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (calendar_date(later) - calendar_date(earlier)).days


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Start of a trailing window of ``days`` days ending at ``now``."""
    return (now or utcnow()) - timedelta(days=days)
