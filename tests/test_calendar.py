"""Tests for calendar primitives and periods."""

from datetime import date

import pytest

from calends import (
    ClosedInterval,
    Period,
    days_in_month,
    days_in_year,
    has_week_53,
    period_ranges,
    shift_months,
    weeks_in_year,
)


class TestCalendarPrimitives:
    """Test day, week and month counting."""

    def test_days_in_month_leap_february(self):
        """February has 29 days in leap years only."""
        assert days_in_month(2020, 2) == 29
        assert days_in_month(2022, 2) == 28
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29

    def test_days_in_year(self):
        assert days_in_year(2020) == 366
        assert days_in_year(2022) == 365

    def test_week_53_when_year_starts_on_thursday(self):
        """2015 and 2026 start on a Thursday."""
        assert has_week_53(2015)
        assert has_week_53(2026)

    def test_week_53_when_leap_year_starts_on_wednesday(self):
        """2020 is a leap year starting on a Wednesday."""
        assert has_week_53(2020)
        assert weeks_in_year(2020) == 53

    def test_no_week_53(self):
        assert not has_week_53(2022)
        assert weeks_in_year(2022) == 52
        # 2014 starts on a Wednesday but is not a leap year
        assert not has_week_53(2014)


class TestShiftMonths:
    """Test whole-month arithmetic."""

    def test_clamps_to_month_end(self):
        assert shift_months(date(2022, 1, 31), 1) == date(2022, 2, 28)
        assert shift_months(date(2020, 1, 31), 1) == date(2020, 2, 29)

    def test_crosses_year_boundaries(self):
        assert shift_months(date(2022, 11, 15), 3) == date(2023, 2, 15)
        assert shift_months(date(2022, 2, 15), -3) == date(2021, 11, 15)

    def test_preserve_policy_keeps_month_end(self):
        """A month-end date stays on the month end."""
        assert shift_months(date(2022, 2, 28), 1, "preserve") == date(2022, 3, 31)
        assert shift_months(date(2022, 2, 28), 1, "clamp") == date(2022, 3, 28)

    def test_preserve_policy_ignores_mid_month_dates(self):
        assert shift_months(date(2022, 2, 27), 1, "preserve") == date(2022, 3, 27)

    def test_preserve_policy_backwards(self):
        assert shift_months(date(2022, 1, 31), -1, "preserve") == date(2021, 12, 31)
        assert shift_months(date(2022, 4, 30), -1, "preserve") == date(2022, 3, 31)
        assert shift_months(date(2022, 4, 30), -1, "clamp") == date(2022, 3, 30)

    def test_overflow(self):
        """Shifting past the representable years raises OverflowError."""
        with pytest.raises(OverflowError):
            shift_months(date(9999, 12, 1), 1)
        with pytest.raises(OverflowError):
            shift_months(date(1, 1, 1), -1)


class TestPeriod:
    """Test calendar-aligned periods."""

    def test_containing_month(self):
        period = Period.containing("month", date(2022, 2, 14))

        assert period.start == date(2022, 2, 1)
        assert period.end == date(2022, 2, 28)
        assert len(list(period.dates())) == 28

    def test_containing_week_starts_monday(self):
        """Jan 5, 2022 is a Wednesday."""
        period = Period.containing("week", date(2022, 1, 5))

        assert period.start == date(2022, 1, 3)
        assert period.end == date(2022, 1, 9)
        assert str(period) == "2022-W01"

    def test_containing_quarter(self):
        period = Period.containing("quarter", date(2022, 5, 20))

        assert period.start == date(2022, 4, 1)
        assert period.end == date(2022, 6, 30)
        assert str(period) == "2022-Q2"

    def test_biweek_spans_two_iso_weeks(self):
        """Biweek n covers ISO weeks 2n-1 and 2n."""
        period = Period.containing("biweek", date(2022, 1, 12))

        assert period.start == date(2022, 1, 3)
        assert period.end == date(2022, 1, 16)

    def test_biweek_week_53_stands_alone(self):
        """Week 53 of 2020 forms a one-week biweek."""
        period = Period.containing("biweek", date(2020, 12, 30))

        assert period.start == date(2020, 12, 28)
        assert period.end == date(2021, 1, 3)
        assert period.succ().start == date(2021, 1, 4)

    def test_containing_half(self):
        period = Period.containing("half", date(2022, 8, 10))

        assert period.start == date(2022, 7, 1)
        assert period.end == date(2022, 12, 31)
        assert str(period) == "2022-H2"
        assert period.succ() == Period("half", date(2023, 1, 1))

    def test_first_half_ends_in_june(self):
        period = Period.containing("half", date(2022, 2, 1))

        assert period.end == date(2022, 6, 30)
        assert str(period) == "2022-H1"
        assert len(list(period.dates())) == 181

    def test_misaligned_half_rejected(self):
        with pytest.raises(ValueError, match="does not begin"):
            Period("half", date(2022, 4, 1))

    def test_succ_and_pred(self):
        period = Period.containing("month", date(2022, 12, 5))

        assert period.succ() == Period("month", date(2023, 1, 1))
        assert period.pred() == Period("month", date(2022, 11, 1))

    def test_succ_at_end_of_calendar(self):
        period = Period.containing("year", date.max)

        with pytest.raises(OverflowError):
            period.succ()

    def test_dates_at_end_of_calendar(self):
        """The last representable day can be enumerated."""
        period = Period.containing("day", date.max)

        assert list(period.dates()) == [date.max]

    def test_misaligned_start_rejected(self):
        with pytest.raises(ValueError, match="does not begin"):
            Period("month", date(2022, 1, 2))

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError, match="Unknown calendar basis"):
            Period("fortnight", date(2022, 1, 1))

    def test_contains(self):
        period = Period.containing("year", date(2022, 6, 1))

        assert date(2022, 12, 31) in period
        assert date(2023, 1, 1) not in period
        assert "2022-06-01" not in period

    def test_to_interval(self):
        period = Period.containing("month", date(2022, 3, 9))

        assert period.to_interval() == ClosedInterval(date(2022, 3, 1), date(2022, 3, 31))

    def test_str(self):
        assert str(Period.containing("year", date(2022, 3, 9))) == "2022"
        assert str(Period.containing("month", date(2022, 3, 9))) == "2022-03"
        assert str(Period.containing("day", date(2022, 3, 9))) == "2022-03-09"


class TestPeriodRanges:
    """Test splitting a date range into periods."""

    def test_month_ranges(self):
        periods = period_ranges("month", date(2022, 1, 15), date(2022, 3, 3))

        assert [p.start for p in periods] == [
            date(2022, 1, 1),
            date(2022, 2, 1),
            date(2022, 3, 1),
        ]

    def test_single_period(self):
        periods = period_ranges("year", date(2022, 1, 15), date(2022, 3, 3))

        assert periods == [Period("year", date(2022, 1, 1))]

    def test_empty_when_end_before_start(self):
        """A range ending before the first period starts is empty."""
        periods = period_ranges("day", date(2022, 1, 15), date(2022, 1, 14))

        assert periods == []
