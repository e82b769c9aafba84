"""
Accounting calendar

Resolves month / year / fiscal-year windows in IST. The same windows are
used for transaction listing filters and statement periods, so an entry
dated 2026-03-31 23:30 IST always lands in March regardless of where the
server runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from core.constants import Accounting
from core.ledger.errors import ValidationError
from core.utils.timezone import IST, now_utc, to_ist, to_utc

ALL = "all"

# Windows end on 1 January of the following year
MIN_YEAR = 1900
MAX_YEAR = 9998

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class DateWindow:
    """Half-open time window [start, end) with UTC-aware bounds"""

    start: datetime
    end: datetime
    label: str

    def contains(self, moment: datetime) -> bool:
        moment = to_utc(moment)
        return self.start <= moment < self.end


def _ist_midnight(day: date) -> datetime:
    try:
        return to_utc(datetime.combine(day, time.min, tzinfo=IST))
    except OverflowError:
        raise ValidationError(f"Date out of range: {day.isoformat()}") from None


def _check_year(year: int) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Invalid year: {year}")
    return year


def _check_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    return month


def month_window(year: int, month: int) -> DateWindow:
    """One IST calendar month, e.g. "February 2026" """
    _check_year(year)
    _check_month(month)
    next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
    return DateWindow(
        start=_ist_midnight(date(year, month, 1)),
        end=_ist_midnight(date(next_year, next_month, 1)),
        label=f"{MONTH_NAMES[month - 1]} {year}",
    )


def year_window(year: int) -> DateWindow:
    """One IST calendar year, labelled "FY <year>" """
    _check_year(year)
    return DateWindow(
        start=_ist_midnight(date(year, 1, 1)),
        end=_ist_midnight(date(year + 1, 1, 1)),
        label=f"FY {year}",
    )


def fiscal_year_window(start_year: int) -> DateWindow:
    """Indian fiscal year: 1 April start_year to 31 March of the next year"""
    _check_year(start_year)
    month = Accounting.FISCAL_YEAR_START_MONTH
    return DateWindow(
        start=_ist_midnight(date(start_year, month, 1)),
        end=_ist_midnight(date(start_year + 1, month, 1)),
        label=f"FY {start_year}-{(start_year + 1) % 100:02d}",
    )


def range_window(start: date, end: date) -> DateWindow:
    """Explicit IST date range, both ends inclusive"""
    if end < start:
        raise ValidationError("End date is before start date")
    if end.year > MAX_YEAR:
        raise ValidationError(f"Date out of range: {end.isoformat()}")
    return DateWindow(
        start=_ist_midnight(start),
        end=_ist_midnight(end + timedelta(days=1)),
        label=f"{start.isoformat()} to {end.isoformat()}",
    )


def year_of(moment: datetime | None = None) -> int:
    """IST calendar year containing a moment (default: now)"""
    if moment is None:
        moment = now_utc()
    return to_ist(moment).year


def _parse_int(value: str | int, name: str) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}: {value}") from None


def _is_set(value: str | int | None) -> bool:
    return value is not None and value != "" and value != ALL


def resolve_list_window(
    month: str | int | None = None,
    year: str | int | None = None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
) -> DateWindow | None:
    """Window for transaction listing filters

    Precedence: (month, year) -> year alone -> explicit range -> no window.
    "all" or empty values mean "not set".
    """
    if _is_set(month) and _is_set(year):
        return month_window(_parse_int(year, "year"), _parse_int(month, "month"))
    if _is_set(year):
        return year_window(_parse_int(year, "year"))
    if start_date or end_date:
        start = parse_date(start_date) if start_date else date(1900, 1, 1)
        end = parse_date(end_date) if end_date else to_ist(now_utc()).date()
        return range_window(start, end)
    return None


def parse_date(value: date | str) -> date:
    """Parse a YYYY-MM-DD date"""
    if isinstance(value, datetime):
        return to_ist(value).date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value}") from None


def parse_entry_date(value: datetime | date | str | None) -> datetime:
    """Parse the date of a ledger entry into an aware UTC datetime

    - None: now
    - date-only ("2026-02-10"): IST midnight of that day
    - naive datetime: IST wall-clock time
    - aware datetime: kept as is
    """
    if value is None or value == "":
        return now_utc().replace(microsecond=0)
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return _ist_midnight(value)
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value}")

    text = value.strip()
    try:
        if len(text) == 10:
            return _ist_midnight(date.fromisoformat(text))
        return to_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {value}") from None
