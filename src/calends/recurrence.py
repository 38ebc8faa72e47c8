"""Recurrence: a resumable, lazily evaluated sequence of recurring dates."""

from collections import deque
from datetime import date
from itertools import islice
from typing import TYPE_CHECKING, Any, Iterator, Literal

from calends.calendar import Period
from calends.errors import RecurrenceStateError
from calends.interval import Interval
from calends.logging import get_logger, timed_block
from calends.rule import Rule

if TYPE_CHECKING:
    from calends.backends.base import Backend

RecurrenceState = Literal["active", "exhausted"]


def _item_date(item: Any) -> date:
    """The date an item is ordered and bounded by."""
    if isinstance(item, Interval):
        return item.start_opt()
    return item


class Recurrence:
    """Walks successive periods of a rule and yields the matching dates.

    The recurrence is an iterator: each ``next()`` call expands at most one
    more period. ``start`` is an inclusive lower bound and ``until`` an
    exclusive upper bound. Without ``until`` (or a count) the sequence does
    not end by itself; stop consuming it to stop.

    Bounds must be set before iteration begins. A recurrence cannot be
    rewound; build a new one to start over.

    Example:
        >>> recur = Recurrence(Rule.monthly(), date(2022, 1, 1)).until(date(2022, 3, 1))
        >>> list(recur)
        [datetime.date(2022, 1, 1), datetime.date(2022, 2, 1)]
    """

    def __init__(self, rule: Rule, start: date | None = None) -> None:
        """Initialize a Recurrence.

        Args:
            rule: The rule deciding which dates recur in each period.
            start: First date the recurrence may produce (inclusive). Rules
                without an explicit anchor (day, weekday, month) take it
                from this date. When None the recurrence begins at the
                earliest representable period.
        """
        self._rule = rule
        self._start = start
        self._until: date | None = None
        self._until_inclusive = False
        self._count: int | None = None

        self._started = False
        self._state: RecurrenceState = "active"
        self._cursor: Period | None = None
        self._buffer: deque = deque()
        self._produced = 0
        self._log = get_logger(__name__).bind(rule=type(rule).__name__)

    # Builders

    def _check_not_started(self, builder: str) -> None:
        if self._started:
            raise RecurrenceStateError(f"{builder}() must be called before iterating")

    def with_start(self, start: date) -> "Recurrence":
        """Set the inclusive lower bound."""
        self._check_not_started("with_start")
        self._start = start
        return self

    def until(self, until: date) -> "Recurrence":
        """Stop before ``until`` (exclusive)."""
        self._check_not_started("until")
        self._until = until
        self._until_inclusive = False
        return self

    def until_and_including(self, until: date) -> "Recurrence":
        """Stop after ``until`` (inclusive)."""
        self._check_not_started("until_and_including")
        self._until = until
        self._until_inclusive = True
        return self

    def with_count(self, count: int) -> "Recurrence":
        """Stop after producing ``count`` items."""
        self._check_not_started("with_count")
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self._count = count
        return self

    # Inspection

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def start(self) -> date | None:
        return self._start

    @property
    def state(self) -> RecurrenceState:
        return self._state

    @property
    def is_exhausted(self) -> bool:
        return self._state == "exhausted"

    @property
    def is_bounded(self) -> bool:
        return self._until is not None or self._count is not None

    # Iteration

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._started:
            self._begin()

        while self._state == "active":
            if self._count is not None and self._produced >= self._count:
                self._exhaust("count_reached")
                break

            if self._buffer:
                item = self._buffer.popleft()
                when = _item_date(item)
                if self._start is not None and when < self._start:
                    continue
                if self._past_until(when):
                    self._exhaust("until_reached")
                    break
                self._produced += 1
                return item

            if self._cursor is None:
                self._exhaust("calendar_exhausted")
                break
            self._advance()

        raise StopIteration

    def take(self, n: int) -> list[Any]:
        """Return up to the next ``n`` items."""
        return list(islice(self, n))

    def _begin(self) -> None:
        self._started = True
        anchor = self._start or date.min
        if self._start is not None:
            self._rule = self._rule.anchored(self._start)
        self._cursor = Period.containing(self._rule.period_kind, anchor)
        self._log.debug(
            "recurrence_started",
            start=str(self._start) if self._start else None,
            until=str(self._until) if self._until else None,
            count=self._count,
        )

    def _advance(self) -> None:
        """Expand the cursor period into the buffer and move to the next one."""
        period = self._cursor
        if self._past_until(period.start):
            self._exhaust("until_reached")
            return

        self._buffer.extend(self._rule.dates_in_period(period))
        try:
            self._cursor = period.succ()
        except OverflowError:
            self._cursor = None

    def _past_until(self, when: date) -> bool:
        if self._until is None:
            return False
        if self._until_inclusive:
            return when > self._until
        return when >= self._until

    def _exhaust(self, reason: str) -> None:
        self._state = "exhausted"
        self._buffer.clear()
        self._log.debug("recurrence_exhausted", reason=reason, produced=self._produced)

    # Materialization

    def to_frame(self, backend: "Literal['pandas', 'polars'] | Backend" = "pandas") -> Any:
        """Drain a bounded recurrence into a DataFrame.

        Dates become a single ``date`` column; intervals become ``start``
        and ``end`` columns.

        Args:
            backend: "pandas", "polars", or a backend instance.

        Raises:
            ValueError: If the recurrence has neither ``until`` nor a count.
        """
        if not self.is_bounded:
            raise ValueError("Cannot materialize an unbounded recurrence; set until() or with_count()")

        if backend == "pandas":
            from calends.backends.pandas import PandasBackend

            backend = PandasBackend()
        elif backend == "polars":
            from calends.backends.polars import PolarsBackend

            backend = PolarsBackend()

        with timed_block(self._log, "recurrence_materialized") as fields:
            items = list(self)
            fields["rows"] = len(items)
            if items and isinstance(items[0], Interval):
                return backend.from_intervals(items)
            return backend.from_dates(items)

    def __repr__(self) -> str:
        return (
            f"Recurrence(rule={self._rule!r}, start={self._start!r}, "
            f"until={self._until!r}, state={self._state!r})"
        )
