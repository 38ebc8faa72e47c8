"""Tests for recurrence rules."""

from datetime import date

import pytest

from calends import (
    Biweekly,
    Daily,
    GrammarError,
    Monthly,
    Period,
    Quarterly,
    Rule,
    Selection,
    Weekday,
    Weekly,
    Yearly,
    configure_calends,
    occurrence,
    offset,
)


def period(kind, year, month=1, day=1):
    return Period.containing(kind, date(year, month, day))


class TestSimpleRules:
    """Test the fixed-anchor rules."""

    def test_daily(self):
        assert Daily().dates_in_period(period("day", 2022, 3, 9)) == [date(2022, 3, 9)]

    def test_weekly(self):
        """Weekday 3 is Wednesday."""
        result = Weekly(3).dates_in_period(period("week", 2022, 1, 5))

        assert result == [date(2022, 1, 5)]

    def test_biweekly(self):
        """Wednesday of the second week of the Jan 3 to Jan 16 biweek."""
        result = Biweekly(3, 2).dates_in_period(period("biweek", 2022, 1, 5))

        assert result == [date(2022, 1, 12)]

    def test_biweekly_week_53_falls_back_to_first_week(self):
        """ISO week 53 of 2020 forms a biweek on its own."""
        result = Biweekly(5, 2).dates_in_period(period("biweek", 2020, 12, 30))

        assert result == [date(2021, 1, 1)]

    def test_monthly_clamps_day(self):
        assert Monthly(31).dates_in_period(period("month", 2022, 2)) == [date(2022, 2, 28)]
        assert Monthly(31).dates_in_period(period("month", 2022, 3)) == [date(2022, 3, 31)]

    def test_quarterly(self):
        """Month 2 of the second quarter is May."""
        result = Quarterly(2, 15).dates_in_period(period("quarter", 2022, 4))

        assert result == [date(2022, 5, 15)]

    def test_yearly_leap_day(self):
        rule = Yearly(2, 29)

        assert rule.dates_in_period(period("year", 2020)) == [date(2020, 2, 29)]
        assert rule.dates_in_period(period("year", 2021)) == [date(2021, 2, 28)]

    def test_unanchored_defaults(self):
        assert Weekly().dates_in_period(period("week", 2022, 1, 5)) == [date(2022, 1, 3)]
        assert Monthly().dates_in_period(period("month", 2022, 3)) == [date(2022, 3, 1)]
        assert Yearly().dates_in_period(period("year", 2022)) == [date(2022, 1, 1)]

    def test_wrong_period_kind(self):
        with pytest.raises(ValueError, match="expects a month period"):
            Monthly(1).dates_in_period(period("week", 2022, 1, 5))

    def test_out_of_range_anchor(self):
        with pytest.raises(ValueError):
            Weekly(8)
        with pytest.raises(ValueError):
            Biweekly(week=3)
        with pytest.raises(ValueError):
            Monthly(0)
        with pytest.raises(ValueError):
            Quarterly(month=4)
        with pytest.raises(ValueError):
            Yearly(month=13)

    def test_factories(self):
        assert Rule.daily() == Daily()
        assert Rule.weekly(2) == Weekly(2)
        assert Rule.biweekly(2, 1) == Biweekly(2, 1)
        assert Rule.monthly(15) == Monthly(15)
        assert Rule.quarterly(1, 5) == Quarterly(1, 5)
        assert Rule.yearly(6, 1) == Yearly(6, 1)


class TestAnchored:
    """Test filling missing anchors from a start date."""

    def test_weekly(self):
        assert Weekly().anchored(date(2022, 1, 5)) == Weekly(3)

    def test_biweekly(self):
        """Jan 12, 2022 is the Wednesday of the second week of its biweek."""
        assert Biweekly().anchored(date(2022, 1, 12)) == Biweekly(3, 2)
        assert Biweekly(week=1).anchored(date(2022, 1, 12)) == Biweekly(3, 1)

    def test_monthly(self):
        assert Monthly().anchored(date(2022, 1, 31)) == Monthly(31)

    def test_quarterly(self):
        assert Quarterly().anchored(date(2022, 8, 10)) == Quarterly(2, 10)

    def test_yearly(self):
        assert Yearly().anchored(date(2020, 2, 29)) == Yearly(2, 29)

    def test_explicit_anchor_kept(self):
        assert Monthly(5).anchored(date(2022, 1, 31)) == Monthly(5)
        assert Yearly(month=6).anchored(date(2022, 1, 31)) == Yearly(6, 31)


class TestSelection:
    """Test selection-grammar rules."""

    def test_parse_defaults_to_month(self):
        rule = Selection.parse("L3K4IN")

        assert rule.period_kind == "month"
        assert rule.dates_in_period(period("month", 2022, 3)) == [date(2022, 3, 23)]

    def test_parse_uses_configured_period_kind(self):
        configure_calends(default_period_kind="year")

        rule = Rule.selection("L3M5KN")

        assert rule.period_kind == "year"
        assert rule.dates_in_period(period("year", 2022)) == [
            date(2022, 3, 4),
            date(2022, 3, 11),
            date(2022, 3, 18),
            date(2022, 3, 25),
        ]

    def test_parse_fails_eagerly(self):
        with pytest.raises(GrammarError):
            Selection.parse("L13MN")

    def test_str(self):
        assert str(Selection.parse("L3K4IN/P5D")) == "L3K4IN/P5D"

    def test_invalid_period_kind(self):
        with pytest.raises(ValueError, match="month or year"):
            Selection("week", (Weekday(1),))

    def test_no_rules(self):
        with pytest.raises(ValueError, match="at least one"):
            Selection("month", ())


class TestHelpers:
    """Test the offset and occurrence helpers."""

    def test_offset_last_day_of_month(self):
        rule = offset("month", -1)

        assert rule.dates_in_period(period("month", 2022, 2)) == [date(2022, 2, 28)]

    def test_offset_day_of_year(self):
        rule = offset("year", 60)

        assert rule.dates_in_period(period("year", 2020)) == [date(2020, 2, 29)]
        assert rule.dates_in_period(period("year", 2022)) == [date(2022, 3, 1)]

    def test_third_wednesday(self):
        rule = occurrence("month", 3, 3)

        assert rule.dates_in_period(period("month", 2022, 3)) == [date(2022, 3, 16)]

    def test_last_monday(self):
        rule = occurrence("month", -1, 1)

        assert rule.dates_in_period(period("month", 2022, 3)) == [date(2022, 3, 28)]

    def test_occurrence_invalid_weekday(self):
        with pytest.raises(ValueError):
            occurrence("month", 1, 0)
