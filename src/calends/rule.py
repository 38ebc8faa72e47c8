"""Recurrence rules: which dates recur within each calendar period."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import ClassVar, get_args

from calends.calendar import CalendarBasis, Period, PeriodKind, days_in_month
from calends.interval import ClosedInterval
from calends.selection import (
    DayOfMonth,
    OrdinalDay,
    Position,
    SelectionRule,
    Weekday,
    evaluate,
    format_rules,
    parse,
)


def _check_range(name: str, value: int | None, low: int, high: int) -> None:
    if value is not None and not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


class Rule(ABC):
    """A policy describing which dates recur in successive periods.

    Every rule is tied to a period kind such as a week or a month
    and yields zero or more dates inside each period, never outside it.
    Rules are immutable values and evaluating one is a pure function of
    the period.
    """

    period_kind: CalendarBasis

    @abstractmethod
    def dates_in_period(self, period: Period) -> list[date] | list[ClosedInterval]:
        """Return the recurring dates (or intervals) within ``period``."""
        ...

    def anchored(self, start: date) -> "Rule":
        """Fill any missing anchor (day, weekday, month) from ``start``."""
        return self

    def _check_period(self, period: Period) -> None:
        if period.kind != self.period_kind:
            raise ValueError(
                f"{type(self).__name__} expects a {self.period_kind} period, got {period.kind}"
            )

    @staticmethod
    def daily() -> "Daily":
        return Daily()

    @staticmethod
    def weekly(weekday: int | None = None) -> "Weekly":
        return Weekly(weekday)

    @staticmethod
    def biweekly(weekday: int | None = None, week: int | None = None) -> "Biweekly":
        return Biweekly(weekday, week)

    @staticmethod
    def monthly(day: int | None = None) -> "Monthly":
        return Monthly(day)

    @staticmethod
    def quarterly(month: int | None = None, day: int | None = None) -> "Quarterly":
        return Quarterly(month, day)

    @staticmethod
    def yearly(month: int | None = None, day: int | None = None) -> "Yearly":
        return Yearly(month, day)

    @staticmethod
    def selection(text: str, period_kind: PeriodKind | None = None) -> "Selection":
        return Selection.parse(text, period_kind)


@dataclass(frozen=True)
class Daily(Rule):
    """Every day."""

    period_kind: ClassVar[CalendarBasis] = "day"

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        return [period.start]


@dataclass(frozen=True)
class Weekly(Rule):
    """One date per ISO week, on ``weekday`` (1 = Monday)."""

    weekday: int | None = None

    period_kind: ClassVar[CalendarBasis] = "week"

    def __post_init__(self) -> None:
        _check_range("weekday", self.weekday, 1, 7)

    def anchored(self, start: date) -> "Weekly":
        if self.weekday is not None:
            return self
        return replace(self, weekday=start.isoweekday())

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        return [period.start + timedelta(days=(self.weekday or 1) - 1)]


@dataclass(frozen=True)
class Biweekly(Rule):
    """One date every two ISO weeks.

    ``week`` picks the first or second week of each biweek and ``weekday``
    the day within it. A biweek made of ISO week 53 alone falls back to its
    only week.
    """

    weekday: int | None = None
    week: int | None = None

    period_kind: ClassVar[CalendarBasis] = "biweek"

    def __post_init__(self) -> None:
        _check_range("weekday", self.weekday, 1, 7)
        _check_range("week", self.week, 1, 2)

    def anchored(self, start: date) -> "Biweekly":
        first = Period.containing("biweek", start).start
        return replace(
            self,
            weekday=self.weekday if self.weekday is not None else start.isoweekday(),
            week=self.week if self.week is not None else (start - first).days // 7 + 1,
        )

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        day = period.start + timedelta(weeks=(self.week or 1) - 1, days=(self.weekday or 1) - 1)
        if day > period.end:
            day -= timedelta(weeks=1)
        return [day]


@dataclass(frozen=True)
class Monthly(Rule):
    """One date per month on ``day``, clamped to the month's length."""

    day: int | None = None

    period_kind: ClassVar[CalendarBasis] = "month"

    def __post_init__(self) -> None:
        _check_range("day", self.day, 1, 31)

    def anchored(self, start: date) -> "Monthly":
        if self.day is not None:
            return self
        return replace(self, day=start.day)

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        start = period.start
        day = min(self.day or 1, days_in_month(start.year, start.month))
        return [start.replace(day=day)]


@dataclass(frozen=True)
class Quarterly(Rule):
    """One date per quarter.

    ``month`` is the month within the quarter (1 to 3) and ``day`` is
    clamped to that month's length.
    """

    month: int | None = None
    day: int | None = None

    period_kind: ClassVar[CalendarBasis] = "quarter"

    def __post_init__(self) -> None:
        _check_range("month", self.month, 1, 3)
        _check_range("day", self.day, 1, 31)

    def anchored(self, start: date) -> "Quarterly":
        return replace(
            self,
            month=self.month if self.month is not None else (start.month - 1) % 3 + 1,
            day=self.day if self.day is not None else start.day,
        )

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        month = period.start.month + (self.month or 1) - 1
        day = min(self.day or 1, days_in_month(period.year, month))
        return [date(period.year, month, day)]


@dataclass(frozen=True)
class Yearly(Rule):
    """One date per year; Feb 29 falls on Feb 28 in common years."""

    month: int | None = None
    day: int | None = None

    period_kind: ClassVar[CalendarBasis] = "year"

    def __post_init__(self) -> None:
        _check_range("month", self.month, 1, 12)
        _check_range("day", self.day, 1, 31)

    def anchored(self, start: date) -> "Yearly":
        return replace(
            self,
            month=self.month if self.month is not None else start.month,
            day=self.day if self.day is not None else start.day,
        )

    def dates_in_period(self, period: Period) -> list[date]:
        self._check_period(period)
        month = self.month or 1
        day = min(self.day or 1, days_in_month(period.year, month))
        return [date(period.year, month, day)]


@dataclass(frozen=True)
class Selection(Rule):
    """Dates picked by selection rules within each month or year.

    Example:
        >>> rule = Selection.parse("L3K4IN", "month")   # fourth Wednesday
        >>> rule.dates_in_period(Period.containing("month", date(2022, 3, 1)))
        [datetime.date(2022, 3, 23)]
    """

    period_kind: PeriodKind
    rules: tuple[SelectionRule, ...]

    def __post_init__(self) -> None:
        if self.period_kind not in get_args(PeriodKind):
            raise ValueError(f"Selections evaluate per month or year, not {self.period_kind}")
        object.__setattr__(self, "rules", tuple(self.rules))
        if not self.rules:
            raise ValueError("Selection needs at least one selection rule")

    @classmethod
    def parse(cls, text: str, period_kind: PeriodKind | None = None) -> "Selection":
        """Parse selection text eagerly; malformed text fails here.

        Raises:
            GrammarError: If the text is malformed.
        """
        if period_kind is None:
            from calends.config import get_calends_config

            period_kind = get_calends_config().default_period_kind
        return cls(period_kind, tuple(parse(text)))

    def dates_in_period(self, period: Period) -> list[date] | list[ClosedInterval]:
        self._check_period(period)
        return evaluate(self.rules, period)

    def __str__(self) -> str:
        return format_rules(self.rules)


def offset(period_kind: PeriodKind, n: int) -> Selection:
    """The nth day of each month or year; negative counts from the end.

    ``offset("month", -1)`` is the last day of every month.
    """
    selector: SelectionRule = DayOfMonth(n) if period_kind == "month" else OrdinalDay(n)
    return Selection(period_kind, (selector,))


def occurrence(period_kind: PeriodKind, n: int, weekday: int) -> Selection:
    """The nth ``weekday`` of each month or year; negative counts from the end.

    ``occurrence("month", 3, 3)`` is the third Wednesday of every month.
    """
    _check_range("weekday", weekday, 1, 7)
    return Selection(period_kind, (Weekday(weekday), Position(n)))

