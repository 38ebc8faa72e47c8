"""Intervals of calendar dates: closed, or unbounded on one side.

Intervals are inclusive of both bounds. The text form follows ISO 8601-2
time intervals:

- ``2022-01-01/2023-11-25``: closed
- ``../2022-01-01``: unbounded start
- ``2022-01-01/..``: unbounded end

Parsing also accepts ``start/duration`` and ``duration/end``.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterator

from calends.duration import RelativeDuration
from calends.errors import GrammarError, IntervalConstructionError

_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


class Interval(ABC):
    """A span of dates with an optional start and an optional end."""

    @abstractmethod
    def start_opt(self) -> date | None:
        """The start bound, or None when the start is unbounded."""
        ...

    @abstractmethod
    def end_opt(self) -> date | None:
        """The end bound, or None when the end is unbounded."""
        ...

    # Constructors

    @staticmethod
    def closed(start: date, end: date) -> "ClosedInterval":
        return ClosedInterval(start, end)

    @staticmethod
    def closed_from_start(start: date, duration: RelativeDuration) -> "ClosedInterval":
        """Build ``[start, start + duration]``.

        Raises:
            IntervalConstructionError: If the duration moves the end before
                the start.
        """
        end = duration.apply(start)
        if end < start:
            raise IntervalConstructionError(
                f"duration {duration} moves {start} back to {end}"
            )
        return ClosedInterval(start, end)

    @staticmethod
    def closed_from_end(end: date, duration: RelativeDuration) -> "ClosedInterval":
        """Build ``[end - duration, end]``."""
        start = (-duration).apply(end)
        if end < start:
            raise IntervalConstructionError(
                f"duration {duration} moves {end} forward to {start}"
            )
        return ClosedInterval(start, end)

    @staticmethod
    def unbounded_start(end: date) -> "UnboundedStartInterval":
        return UnboundedStartInterval(end)

    @staticmethod
    def unbounded_end(start: date) -> "UnboundedEndInterval":
        return UnboundedEndInterval(start)

    # Queries

    def contains(self, d: date) -> bool:
        start = self.start_opt()
        end = self.end_opt()
        if start is not None and d < start:
            return False
        if end is not None and d > end:
            return False
        return True

    def __contains__(self, d: object) -> bool:
        return isinstance(d, date) and self.contains(d)

    def _sort_key(self) -> tuple:
        start = self.start_opt()
        end = self.end_opt()
        # Unbounded sides sort outermost
        start_key = (0, date.min) if start is None else (1, start)
        end_key = (1, date.max) if end is None else (0, end)
        return start_key + end_key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    # Text form

    def iso8601(self) -> str:
        start = self.start_opt()
        end = self.end_opt()
        left = ".." if start is None else start.isoformat()
        right = ".." if end is None else end.isoformat()
        return f"{left}/{right}"

    def __str__(self) -> str:
        return self.iso8601()

    @staticmethod
    def parse(text: str) -> "Interval":
        """Parse interval text.

        Raises:
            GrammarError: If the text is malformed.
            IntervalConstructionError: If a closed interval would be inverted.
        """
        slashes = [i for i, c in enumerate(text) if c == "/"]
        if len(slashes) != 1:
            position = slashes[1] if slashes else len(text)
            raise GrammarError("expected exactly one '/'", position, text)
        left, right = text.split("/")
        right_pos = len(left) + 1

        if left == ".." and right == "..":
            raise GrammarError("interval must have at least one bound", 0, text)
        if left == "..":
            return UnboundedStartInterval(_parse_date(text, right, right_pos))
        if right == "..":
            return UnboundedEndInterval(_parse_date(text, left, 0))
        if left.startswith("P"):
            duration = _parse_duration(text, left, 0)
            return Interval.closed_from_end(_parse_date(text, right, right_pos), duration)
        if right.startswith("P"):
            duration = _parse_duration(text, right, right_pos)
            return Interval.closed_from_start(_parse_date(text, left, 0), duration)

        start = _parse_date(text, left, 0)
        end = _parse_date(text, right, right_pos)
        if end < start:
            raise IntervalConstructionError(f"interval ends ({end}) before it starts ({start})")
        return ClosedInterval(start, end)


@dataclass(frozen=True, eq=True, order=False)
class ClosedInterval(Interval):
    """An interval bounded on both sides; ``start <= end``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise IntervalConstructionError(
                f"interval ends ({self.end}) before it starts ({self.start})"
            )

    def start_opt(self) -> date | None:
        return self.start

    def end_opt(self) -> date | None:
        return self.end


@dataclass(frozen=True, eq=True, order=False)
class UnboundedStartInterval(Interval):
    """Everything up to and including ``end``."""

    end: date

    def start_opt(self) -> date | None:
        return None

    def end_opt(self) -> date | None:
        return self.end


@dataclass(frozen=True, eq=True, order=False)
class UnboundedEndInterval(Interval):
    """Everything from ``start`` onwards."""

    start: date

    def start_opt(self) -> date | None:
        return self.start

    def end_opt(self) -> date | None:
        return None


def successive(start: date, duration: RelativeDuration) -> Iterator[ClosedInterval]:
    """Generate back-to-back closed intervals of the given duration.

    Each interval starts where the previous one ended, so a one month
    duration from Jan 1 gives Jan 1/Feb 1, Feb 1/Mar 1, and so on. The
    generator is endless; stop consuming it to stop.
    """
    if duration.is_zero():
        raise ValueError("successive intervals need a non-zero duration")
    return _successive(start, duration)


def _successive(start: date, duration: RelativeDuration) -> Iterator[ClosedInterval]:
    current = start
    while True:
        interval = Interval.closed_from_start(current, duration)
        yield interval
        current = interval.end


def _parse_date(text: str, part: str, offset: int) -> date:
    m = _DATE.fullmatch(part)
    if m is None:
        raise GrammarError("expected a YYYY-MM-DD date", offset, text)
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as exc:
        raise GrammarError(f"invalid date: {exc}", offset, text) from exc


def _parse_duration(text: str, part: str, offset: int) -> RelativeDuration:
    try:
        return RelativeDuration.parse(part)
    except GrammarError as exc:
        raise GrammarError(exc.reason, offset + exc.position, text) from exc
