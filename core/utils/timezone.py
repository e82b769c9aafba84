"""
Timezone utilities

Helpers for the rule: store in UTC, present and bucket in IST.
Naive datetimes are always read as IST wall-clock time.
"""

from datetime import datetime, timezone, timedelta

from core.constants import Accounting

# IST timezone (UTC+05:30)
IST = timezone(timedelta(minutes=Accounting.UTC_OFFSET_MINUTES), name="IST")


def to_ist(dt: datetime) -> datetime:
    """Convert a datetime to IST

    Args:
        dt: datetime (naive values are IST wall-clock time)

    Returns:
        datetime in IST

    Example:
        >>> utc_dt = datetime(2026, 2, 20, 20, 0, 0, tzinfo=timezone.utc)
        >>> to_ist(utc_dt).day
        21  # 01:30 next day
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=IST)
    return dt.astimezone(IST)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC

    Naive values are IST wall-clock time, as in to_ist.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=IST)
    return dt.astimezone(timezone.utc)


def format_ist(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Format a datetime as an IST string

    Args:
        dt: datetime (UTC recommended)
        fmt: strftime format

    Returns:
        Formatted IST string
    """
    return to_ist(dt).strftime(fmt)


def to_storage(dt: datetime) -> str:
    """Serialize a datetime for storage

    UTC, second precision, ISO-8601. A fixed shape keeps string
    comparison in SQL chronological.
    """
    return to_utc(dt).replace(microsecond=0).isoformat()


def from_storage(value: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime"""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def now_utc() -> datetime:
    """Current UTC time (timezone aware)"""
    return datetime.now(timezone.utc)


def now_ist() -> datetime:
    """Current IST time"""
    return datetime.now(IST)
