"""Relative durations measured in months, weeks and days."""

import re
from dataclasses import dataclass, replace
from datetime import date
from typing import TypeVar

from calends.calendar import MonthEndPolicy, shift_days, shift_months, shift_weeks
from calends.errors import GrammarError

D = TypeVar("D", bound=date)

_DURATION = re.compile(
    r"P(?:(?P<years>[+-]?\d+)Y)?(?:(?P<months>[+-]?\d+)M)?"
    r"(?:(?P<weeks>[+-]?\d+)W)?(?:(?P<days>[+-]?\d+)D)?",
    re.ASCII,
)


def _pluralize(unit: str, count: int) -> str | None:
    if count == 0:
        return None
    if count in (1, -1):
        return f"{count} {unit}"
    return f"{count} {unit}s"


@dataclass(frozen=True)
class RelativeDuration:
    """A signed offset in calendar months, weeks and days.

    Applying a duration to a date always moves by months first, then weeks,
    then days, whatever order the fields were set in. Because month lengths
    vary, applying two durations one after the other is not commutative in
    general: ``(d + a) + b`` can differ from ``(d + b) + a``.

    Example:
        >>> months(1).with_days(-2).apply(date(2022, 1, 1))
        datetime.date(2022, 1, 30)
    """

    months: int = 0
    weeks: int = 0
    days: int = 0

    def __post_init__(self) -> None:
        for name in ("months", "weeks", "days"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    @classmethod
    def zero(cls) -> "RelativeDuration":
        return cls()

    def with_months(self, months: int) -> "RelativeDuration":
        """Return a copy with the month count replaced."""
        return replace(self, months=months)

    def with_weeks(self, weeks: int) -> "RelativeDuration":
        """Return a copy with the week count replaced."""
        return replace(self, weeks=weeks)

    def with_days(self, days: int) -> "RelativeDuration":
        """Return a copy with the day count replaced."""
        return replace(self, days=days)

    def is_zero(self) -> bool:
        return self.months == 0 and self.weeks == 0 and self.days == 0

    def apply(self, d: D, policy: MonthEndPolicy | None = None) -> D:
        """Move a date by this duration: months, then weeks, then days.

        Args:
            d: The date to move.
            policy: Month-end policy for the month step. Defaults to the
                configured ``month_end_policy``.
        """
        result = shift_months(d, self.months, policy)
        result = shift_weeks(result, self.weeks)
        return shift_days(result, self.days)

    def __radd__(self, other: object):
        if isinstance(other, date):
            return self.apply(other)
        return NotImplemented

    def __rsub__(self, other: object):
        if isinstance(other, date):
            return (-self).apply(other)
        return NotImplemented

    def __add__(self, other: object):
        if isinstance(other, RelativeDuration):
            return RelativeDuration(
                self.months + other.months,
                self.weeks + other.weeks,
                self.days + other.days,
            )
        return NotImplemented

    def __sub__(self, other: object):
        if isinstance(other, RelativeDuration):
            return self + (-other)
        return NotImplemented

    def __neg__(self) -> "RelativeDuration":
        return RelativeDuration(-self.months, -self.weeks, -self.days)

    def __mul__(self, factor: object):
        if isinstance(factor, int) and not isinstance(factor, bool):
            return RelativeDuration(
                self.months * factor, self.weeks * factor, self.days * factor
            )
        return NotImplemented

    __rmul__ = __mul__

    def iso8601(self) -> str:
        """Format as an ISO 8601-2 duration, e.g. ``P23M-1W1D``.

        Zero fields are omitted and the sign is applied per field. The zero
        duration formats as ``P0D``.
        """
        parts = [
            f"{count}{unit}"
            for count, unit in ((self.months, "M"), (self.weeks, "W"), (self.days, "D"))
            if count
        ]
        return "P" + ("".join(parts) or "0D")

    def describe(self) -> str:
        """Human readable form such as ``1 month -1 week 1 day``."""
        parts = [
            _pluralize("month", self.months),
            _pluralize("week", self.weeks),
            _pluralize("day", self.days),
        ]
        return " ".join(p for p in parts if p)

    def __str__(self) -> str:
        return self.iso8601()

    @classmethod
    def parse(cls, text: str) -> "RelativeDuration":
        """Parse ``P[n]Y[n]M[n]W[n]D`` text. Years fold into months.

        Raises:
            GrammarError: If the text is not a complete duration.
        """
        duration, end = parse_duration_prefix(text, 0)
        if end != len(text):
            raise GrammarError("unexpected trailing text", end, text)
        return duration


def parse_duration_prefix(text: str, pos: int) -> tuple[RelativeDuration, int]:
    """Parse a duration starting at ``pos``; return it and the end offset."""
    if not text.startswith("P", pos):
        raise GrammarError("expected 'P' to start a duration", pos, text)

    m = _DURATION.match(text, pos)
    parts = m.groupdict()
    if all(v is None for v in parts.values()):
        raise GrammarError("duration has no components", pos + 1, text)

    years = int(parts["years"] or 0)
    duration = RelativeDuration(
        months=years * 12 + int(parts["months"] or 0),
        weeks=int(parts["weeks"] or 0),
        days=int(parts["days"] or 0),
    )
    return duration, m.end()


def months(n: int) -> RelativeDuration:
    """A duration of ``n`` months."""
    return RelativeDuration(months=n)


def weeks(n: int) -> RelativeDuration:
    """A duration of ``n`` weeks."""
    return RelativeDuration(weeks=n)


def days(n: int) -> RelativeDuration:
    """A duration of ``n`` days."""
    return RelativeDuration(days=n)
