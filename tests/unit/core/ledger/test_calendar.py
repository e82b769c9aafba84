"""
Accounting calendar tests

Windows are IST-based and half-open.
"""

from datetime import date, datetime, timezone

import pytest

from core.ledger.calendar import (
    DateWindow,
    fiscal_year_window,
    month_window,
    parse_date,
    parse_entry_date,
    range_window,
    resolve_list_window,
    year_of,
    year_window,
)
from core.ledger.errors import ValidationError
from core.utils.timezone import IST


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestMonthWindow:
    """month_window"""

    def test_bounds_are_ist_midnight(self) -> None:
        window = month_window(2026, 2)

        assert window.start == utc(2026, 1, 31, 18, 30)
        assert window.end == utc(2026, 2, 28, 18, 30)
        assert window.label == "February 2026"

    def test_december_rolls_over(self) -> None:
        window = month_window(2025, 12)

        assert window.end == utc(2025, 12, 31, 18, 30)

    def test_late_night_ist_stays_in_month(self) -> None:
        """31 March 23:30 IST is 18:00 UTC, still March"""
        moment = datetime(2026, 3, 31, 23, 30, tzinfo=IST)

        assert month_window(2026, 3).contains(moment) is True
        assert month_window(2026, 4).contains(moment) is False

    def test_end_is_exclusive(self) -> None:
        window = month_window(2026, 3)

        assert window.contains(window.end) is False
        assert window.contains(window.start) is True

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month: int) -> None:
        with pytest.raises(ValidationError, match="Invalid month"):
            month_window(2026, month)


class TestYearWindows:
    """year_window / fiscal_year_window"""

    def test_calendar_year(self) -> None:
        window = year_window(2026)

        assert window.start == utc(2025, 12, 31, 18, 30)
        assert window.end == utc(2026, 12, 31, 18, 30)
        assert window.label == "FY 2026"

    def test_fiscal_year(self) -> None:
        window = fiscal_year_window(2025)

        assert window.start == utc(2025, 3, 31, 18, 30)
        assert window.end == utc(2026, 3, 31, 18, 30)
        assert window.label == "FY 2025-26"

    def test_fiscal_label_century(self) -> None:
        assert fiscal_year_window(2099).label == "FY 2099-00"

    def test_invalid_year(self) -> None:
        with pytest.raises(ValidationError):
            year_window(20260)

    @pytest.mark.parametrize("year", [0, 1899, 9999])
    def test_year_bounds(self, year: int) -> None:
        with pytest.raises(ValidationError, match="Invalid year"):
            year_window(year)
        with pytest.raises(ValidationError, match="Invalid year"):
            month_window(year, 12)
        with pytest.raises(ValidationError, match="Invalid year"):
            fiscal_year_window(year)

    def test_last_supported_year(self) -> None:
        assert year_window(9998).end == utc(9998, 12, 31, 18, 30)
        assert month_window(9998, 12).label == "December 9998"


class TestRangeWindow:
    """range_window"""

    def test_inclusive_end(self) -> None:
        window = range_window(date(2026, 2, 1), date(2026, 2, 10))

        assert window.contains(datetime(2026, 2, 10, 23, 59, tzinfo=IST)) is True
        assert window.contains(datetime(2026, 2, 11, 0, 0, tzinfo=IST)) is False

    def test_reversed(self) -> None:
        with pytest.raises(ValidationError):
            range_window(date(2026, 2, 10), date(2026, 2, 1))

    def test_end_at_max_date(self) -> None:
        with pytest.raises(ValidationError, match="out of range"):
            range_window(date(2026, 1, 1), date(9999, 12, 31))

    def test_start_at_min_date(self) -> None:
        with pytest.raises(ValidationError, match="out of range"):
            range_window(date(1, 1, 1), date(2026, 1, 1))


class TestResolveListWindow:
    """resolve_list_window precedence"""

    def test_month_and_year(self) -> None:
        window = resolve_list_window(month="2", year="2026", start_date="2020-01-01")

        assert window == month_window(2026, 2)

    def test_year_only(self) -> None:
        assert resolve_list_window(month="all", year="2026") == year_window(2026)

    def test_month_without_year_ignored(self) -> None:
        assert resolve_list_window(month="3") is None

    def test_range(self) -> None:
        window = resolve_list_window(start_date="2026-02-01", end_date="2026-02-10")

        assert window == range_window(date(2026, 2, 1), date(2026, 2, 10))

    def test_nothing_set(self) -> None:
        assert resolve_list_window(month="all", year="all") is None
        assert resolve_list_window() is None

    def test_bad_year(self) -> None:
        with pytest.raises(ValidationError, match="Invalid year"):
            resolve_list_window(year="twenty")


class TestParsing:
    """parse_date / parse_entry_date"""

    def test_parse_date(self) -> None:
        assert parse_date("2026-02-10") == date(2026, 2, 10)
        assert parse_date("2026-02-10T10:00:00") == date(2026, 2, 10)

    def test_parse_date_invalid(self) -> None:
        with pytest.raises(ValidationError):
            parse_date("10/02/2026")

    def test_date_only_is_ist_midnight(self) -> None:
        assert parse_entry_date("2026-02-10") == utc(2026, 2, 9, 18, 30)

    def test_naive_datetime_is_ist(self) -> None:
        assert parse_entry_date("2026-02-10T10:00:00") == utc(2026, 2, 10, 4, 30)

    def test_aware_datetime_kept(self) -> None:
        assert parse_entry_date("2026-02-10T10:00:00+00:00") == utc(2026, 2, 10, 10, 0)

    def test_none_is_now(self) -> None:
        parsed = parse_entry_date(None)

        assert parsed.tzinfo is not None
        assert parsed.microsecond == 0

    def test_invalid(self) -> None:
        with pytest.raises(ValidationError, match="Invalid date"):
            parse_entry_date("yesterday")

    def test_min_date(self) -> None:
        with pytest.raises(ValidationError):
            parse_entry_date("0001-01-01")


class TestYearOf:
    """year_of"""

    def test_new_year_in_ist(self) -> None:
        """31 Dec 19:00 UTC is already 1 Jan in IST"""
        assert year_of(utc(2025, 12, 31, 19, 0)) == 2026

    def test_default_now(self) -> None:
        assert isinstance(year_of(), int)

    def test_naive_is_ist(self) -> None:
        """Same rule as DateWindow.contains"""
        moment = datetime(2025, 12, 31, 23, 0)

        assert year_of(moment) == 2025
        assert year_window(2025).contains(moment) is True


class TestDateWindow:
    """DateWindow"""

    def test_naive_moment_is_ist(self) -> None:
        window = DateWindow(start=utc(2026, 1, 31, 18, 30), end=utc(2026, 2, 28, 18, 30), label="x")

        assert window.contains(datetime(2026, 2, 1, 0, 0)) is True
