"""Calendar primitives and calendar-aligned periods."""

from calendar import isleap, monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterator, Literal, get_args

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from calends.interval import ClosedInterval

CalendarBasis = Literal["year", "half", "quarter", "month", "biweek", "week", "day"]
PeriodKind = Literal["month", "year"]
MonthEndPolicy = Literal["clamp", "preserve"]


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def days_in_year(year: int) -> int:
    return 366 if isleap(year) else 365


def has_week_53(year: int) -> bool:
    """Whether the ISO week-numbering year has a 53rd week.

    True when January 1 is a Thursday, or a Wednesday in a leap year.
    """
    jan1 = date(year, 1, 1).isoweekday()
    return jan1 == 4 or (isleap(year) and jan1 == 3)


def weeks_in_year(year: int) -> int:
    return 53 if has_week_53(year) else 52


def day_of_year(d: date) -> int:
    return d.timetuple().tm_yday


def shift_months(d: date, months: int, policy: MonthEndPolicy | None = None) -> date:
    """Move a date by whole calendar months.

    The day of month is kept and clamped to the length of the target month,
    so Jan 31 + 1 month is Feb 28 (or 29). With the "preserve" policy a date
    on the last day of its month lands on the last day of the target month.

    Raises:
        OverflowError: If the result falls outside the representable years.
    """
    if policy is None:
        from calends.config import get_calends_config

        policy = get_calends_config().month_end_policy

    if policy == "preserve" and d.day == days_in_month(d.year, d.month):
        # day=31 is clamped to the target month's last day
        delta = relativedelta(months=months, day=31)
    else:
        delta = relativedelta(months=months)

    try:
        return d + delta
    except ValueError as exc:
        raise OverflowError("date value out of range") from exc


def shift_weeks(d: date, weeks: int) -> date:
    return d + timedelta(weeks=weeks)


def shift_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def period_start(kind: CalendarBasis, d: date) -> date:
    """Get the first date of the period containing the given date."""
    if kind == "day":
        return d
    elif kind == "week":
        # ISO week starts on Monday
        return d - timedelta(days=d.weekday())
    elif kind == "biweek":
        monday = d - timedelta(days=d.weekday())
        if d.isocalendar()[1] % 2 == 0:
            return monday - timedelta(weeks=1)
        return monday
    elif kind == "month":
        return d.replace(day=1)
    elif kind == "quarter":
        return d.replace(month=1 + 3 * ((d.month - 1) // 3), day=1)
    elif kind == "half":
        return d.replace(month=1 if d.month <= 6 else 7, day=1)
    elif kind == "year":
        return d.replace(month=1, day=1)
    else:
        raise ValueError(f"Unknown calendar basis: {kind}")


def period_end(kind: CalendarBasis, start: date) -> date:
    """Get the last date of the period beginning on ``start``."""
    if kind == "day":
        return start
    elif kind == "week":
        return start + timedelta(days=6)
    elif kind == "biweek":
        # Biweek n spans ISO weeks 2n-1 and 2n; week 53 stands alone
        iso_year, week, _ = start.isocalendar()
        if week + 1 > weeks_in_year(iso_year):
            return start + timedelta(days=6)
        return start + timedelta(days=13)
    elif kind == "month":
        return start.replace(day=days_in_month(start.year, start.month))
    elif kind == "half":
        return start.replace(month=start.month + 5, day=30 if start.month == 1 else 31)
    elif kind == "quarter":
        last_month = start.month + 2
        return start.replace(
            month=last_month, day=days_in_month(start.year, last_month)
        )
    elif kind == "year":
        return start.replace(month=12, day=31)
    else:
        raise ValueError(f"Unknown calendar basis: {kind}")


@dataclass(frozen=True)
class Period:
    """A calendar-aligned span such as one month or one ISO week.

    Periods are identified by their kind and first date. Use
    :meth:`containing` to find the period a date falls in.
    """

    kind: CalendarBasis
    start: date

    def __post_init__(self) -> None:
        if self.kind not in get_args(CalendarBasis):
            raise ValueError(f"Unknown calendar basis: {self.kind}")
        if period_start(self.kind, self.start) != self.start:
            raise ValueError(f"{self.start} does not begin a {self.kind} period")

    @classmethod
    def containing(cls, kind: CalendarBasis, d: date) -> "Period":
        return cls(kind, period_start(kind, d))

    @property
    def end(self) -> date:
        return period_end(self.kind, self.start)

    @property
    def year(self) -> int:
        return self.start.year

    def dates(self) -> Iterator[date]:
        """Generate every date in the period, in order."""
        current = self.start
        end = self.end
        while True:
            yield current
            if current >= end:
                break
            current += timedelta(days=1)

    def succ(self) -> "Period":
        """The period immediately after this one.

        Raises:
            OverflowError: At the end of the representable calendar.
        """
        return Period.containing(self.kind, self.end + timedelta(days=1))

    def pred(self) -> "Period":
        """The period immediately before this one."""
        return Period.containing(self.kind, self.start - timedelta(days=1))

    def to_interval(self) -> "ClosedInterval":
        from calends.interval import Interval

        return Interval.closed(self.start, self.end)

    def __contains__(self, d: object) -> bool:
        if not isinstance(d, date):
            return False
        return self.start <= d <= self.end

    def __str__(self) -> str:
        if self.kind == "year":
            return f"{self.year}"
        elif self.kind == "quarter":
            return f"{self.year}-Q{(self.start.month - 1) // 3 + 1}"
        elif self.kind == "half":
            return f"{self.year}-H{1 if self.start.month == 1 else 2}"
        elif self.kind == "month":
            return f"{self.year}-{self.start.month:02d}"
        elif self.kind in ("week", "biweek"):
            iso_year, week, _ = self.start.isocalendar()
            return f"{iso_year}-W{week:02d}"
        return self.start.isoformat()


def period_ranges(kind: CalendarBasis, start: date, end: date) -> list[Period]:
    """Split a date range into the consecutive periods that cover it."""
    periods = []
    current = Period.containing(kind, start)

    while current.start <= end:
        periods.append(current)
        if current.end >= end:
            break
        current = current.succ()

    return periods
