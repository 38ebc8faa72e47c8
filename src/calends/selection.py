"""Selection rules: the ISO 8601-2 grammar for picking dates in a period.

A selection is a sequence of selectors, each a number (or a ``{...}`` group
of numbers) followed by a unit letter::

    12M            December
    -2W            second-to-last ISO week of the year
    -10D           tenth-to-last day of the month
    L{1,3,5}K      every Monday, Wednesday and Friday
    L3K4IN         the fourth Wednesday
    L3K4IN/P5D     a five day span starting on the fourth Wednesday

The optional ``L``/``N`` pair wraps the selectors; a ``/duration`` suffix
turns every selected date into a closed interval.

Evaluation starts from every date in a month or year period and narrows the
candidates with each selector in turn. Position selectors (``I``) always run
after the other selectors, and interval extension runs last.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from calends.calendar import (
    Period,
    day_of_year,
    days_in_month,
    days_in_year,
    weeks_in_year,
)
from calends.duration import RelativeDuration, parse_duration_prefix
from calends.errors import GrammarError, PositionWithoutCandidates, SelectionError
from calends.interval import ClosedInterval, Interval
from calends.logging import get_logger

_log = get_logger(__name__)


def _normalize(values: int | Iterable[int]) -> tuple[int, ...]:
    if isinstance(values, int):
        return (values,)
    return tuple(sorted(set(values)))


def _resolve(value: int, total: int) -> int:
    """Resolve a signed ordinal against a count; -1 is the last."""
    return value if value > 0 else total + value + 1


@dataclass(frozen=True)
class SelectionRule(ABC):
    """One selector: narrows the candidate dates of a period."""

    unit = ""

    def __str__(self) -> str:
        values = getattr(self, "values")
        if len(values) == 1:
            return f"{values[0]}{self.unit}"
        return "{" + ",".join(str(v) for v in values) + "}" + self.unit

    @abstractmethod
    def select(self, candidates: list[date], period: Period) -> list[date]:
        """Return the candidates this selector keeps, in order."""
        ...


@dataclass(frozen=True)
class _ValuesRule(SelectionRule):
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _normalize(self.values))
        if not self.values:
            raise ValueError(f"{type(self).__name__} needs at least one value")


@dataclass(frozen=True)
class Month(_ValuesRule):
    """Calendar month of the year; -1 is December."""

    unit = "M"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        months = {_resolve(v, 12) for v in self.values}
        return [d for d in candidates if d.month in months]


@dataclass(frozen=True)
class Week(_ValuesRule):
    """ISO week of the period's year; negative counts from the last week.

    Week 53 only exists in long ISO years; in other years it selects
    nothing.
    """

    unit = "W"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        year = period.year
        total = weeks_in_year(year)
        weeks = {_resolve(v, total) for v in self.values}
        weeks = {w for w in weeks if 1 <= w <= total}
        selected = []
        for d in candidates:
            iso_year, week, _ = d.isocalendar()
            if iso_year == year and week in weeks:
                selected.append(d)
        return selected


@dataclass(frozen=True)
class DayOfMonth(_ValuesRule):
    """Day of the month; negative counts from the month's end."""

    unit = "D"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        return [
            d for d in candidates
            if any(_resolve(v, days_in_month(d.year, d.month)) == d.day for v in self.values)
        ]


@dataclass(frozen=True)
class Weekday(_ValuesRule):
    """Day of the week, 1 = Monday through 7 = Sunday.

    Keeps every occurrence of the weekdays within the period, so the same
    selector picks four or five dates in a month and about 52 in a year.
    """

    unit = "K"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        weekdays = set(self.values)
        return [d for d in candidates if d.isoweekday() in weekdays]


@dataclass(frozen=True)
class OrdinalDay(_ValuesRule):
    """Day of the year; -1 is December 31."""

    unit = "O"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        return [
            d for d in candidates
            if any(_resolve(v, days_in_year(d.year)) == day_of_year(d) for v in self.values)
        ]


@dataclass(frozen=True)
class Position(_ValuesRule):
    """The nth candidate (1-based; negative counts from the end).

    Positions outside the candidate set pick nothing.
    """

    unit = "I"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        count = len(candidates)
        picked = {
            candidates[v - 1 if v > 0 else count + v]
            for v in self.values
            if -count <= v <= count
        }
        return sorted(picked)


@dataclass(frozen=True)
class WithInterval(SelectionRule):
    """Extends every selected date into ``[date, date + duration]``."""

    duration: RelativeDuration = field(default_factory=RelativeDuration)

    def __str__(self) -> str:
        return f"/{self.duration}"

    def select(self, candidates: list[date], period: Period) -> list[date]:
        return candidates

    def extend(self, selected: list[date]) -> list[ClosedInterval]:
        return [Interval.closed_from_start(d, self.duration) for d in selected]


# unit letter -> (selector type, largest magnitude, negatives allowed)
_UNITS: dict[str, tuple[type[_ValuesRule], int, bool]] = {
    "M": (Month, 12, True),
    "W": (Week, 53, True),
    "D": (DayOfMonth, 31, True),
    "K": (Weekday, 7, False),
    "O": (OrdinalDay, 366, True),
    "I": (Position, 366, True),
}

_LARGEST_ORDINAL = max(limit for _, limit, _ in _UNITS.values())

_DIGITS = frozenset("0123456789")


class _Parser:
    """Recursive-descent parser over selection text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, reason: str, position: int | None = None) -> GrammarError:
        return GrammarError(reason, self.pos if position is None else position, self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def parse(self) -> list[SelectionRule]:
        if not self.text:
            raise self.error("empty selection")

        wrapped = self.peek() == "L"
        if wrapped:
            self.pos += 1

        rules: list[SelectionRule] = []
        while self.peek() not in ("", "N", "/"):
            rules.append(self.selector())
        if not rules:
            raise self.error("expected a selector")

        if self.peek() == "N":
            if not wrapped:
                raise self.error("'N' without an opening 'L'")
            self.pos += 1

        if self.peek() == "/":
            self.pos += 1
            try:
                duration, self.pos = parse_duration_prefix(self.text, self.pos)
            except GrammarError as exc:
                raise self.error(exc.reason, exc.position) from exc
            rules.append(WithInterval(duration))

        if self.pos != len(self.text):
            raise self.error(f"unexpected character {self.peek()!r}")
        return rules

    def selector(self) -> SelectionRule:
        start = self.pos
        if self.peek() == "{":
            values = self.group()
        else:
            values = [self.integer()]

        unit = self.peek()
        if unit not in _UNITS:
            if unit == "":
                raise self.error("expected a selector unit")
            raise self.error(f"unknown selector unit {unit!r}")
        self.pos += 1

        rule_type, limit, signed = _UNITS[unit]
        for value in values:
            if value == 0:
                raise self.error(f"{unit} selector value may not be zero", start)
            if value < 0 and not signed:
                raise self.error(f"{unit} selector value may not be negative", start)
            if abs(value) > limit:
                raise self.error(f"{unit} selector value {value} is out of range", start)
        return rule_type(tuple(values))

    def group(self) -> list[int]:
        self.pos += 1  # "{"
        values: list[int] = []
        while True:
            item_start = self.pos
            low = self.integer()
            if self.text.startswith("..", self.pos):
                self.pos += 2
                high = self.integer()
                if max(abs(low), abs(high)) > _LARGEST_ORDINAL:
                    raise self.error(f"range {low}..{high} is out of range", item_start)
                if high < low or (low < 0) != (high < 0):
                    raise self.error(f"invalid range {low}..{high}", item_start)
                values.extend(range(low, high + 1))
            else:
                values.append(low)

            char = self.peek()
            if char == ",":
                self.pos += 1
            elif char == "}":
                self.pos += 1
                return values
            elif char == "":
                raise self.error("unterminated group")
            else:
                raise self.error(f"unexpected character {char!r} in group")

    def integer(self) -> int:
        start = self.pos
        if self.peek() in ("+", "-"):
            self.pos += 1
        digits_start = self.pos
        while self.peek() in _DIGITS:
            self.pos += 1
        if self.pos == digits_start:
            raise self.error("expected an integer", start)
        return int(self.text[start:self.pos])


def parse(text: str) -> list[SelectionRule]:
    """Parse selection text into an ordered list of selectors.

    Raises:
        GrammarError: If the text is malformed or a literal is out of range.
    """
    rules = _Parser(text).parse()
    _log.debug("selection_parsed", text=text, selectors=len(rules))
    return rules


def format_rules(rules: Sequence[SelectionRule]) -> str:
    """Render selectors back into grammar text, e.g. ``L3K4IN/P5D``."""
    body = "".join(str(r) for r in rules if not isinstance(r, WithInterval))
    suffix = "".join(str(r) for r in rules if isinstance(r, WithInterval))
    return f"L{body}N{suffix}"


def evaluate(
    rules: Sequence[SelectionRule], period: Period
) -> list[date] | list[ClosedInterval]:
    """Evaluate selectors against one month or year period.

    Returns the selected dates in ascending order without duplicates, or,
    when the selection ends in an interval extension, one closed interval
    per selected date.

    Raises:
        PositionWithoutCandidates: If a position selector has no preceding
            selector or receives an empty candidate set.
        SelectionError: If more than one interval extension is given.
    """
    if period.kind not in ("month", "year"):
        raise ValueError(f"Selections evaluate per month or year, not {period.kind}")

    filters = [r for r in rules if not isinstance(r, (Position, WithInterval))]
    positions = [r for r in rules if isinstance(r, Position)]
    extensions = [r for r in rules if isinstance(r, WithInterval)]
    if len(extensions) > 1:
        raise SelectionError("a selection may extend into an interval only once")

    candidates = list(period.dates())
    for rule in filters:
        candidates = rule.select(candidates, period)

    for rule in positions:
        if not filters:
            raise PositionWithoutCandidates(
                f"position selector {rule} has no preceding selector"
            )
        if not candidates:
            raise PositionWithoutCandidates(
                f"position selector {rule} has no candidates in {period}"
            )
        candidates = rule.select(candidates, period)

    if extensions:
        return extensions[0].extend(candidates)
    return candidates
