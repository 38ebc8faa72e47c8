"""Abstract backend protocol for building DataFrames of dates."""

from datetime import date
from typing import Protocol, TypeVar

from calends.interval import Interval

DF = TypeVar("DF", covariant=True)


class Backend(Protocol[DF]):
    """Protocol defining how dates and intervals become a DataFrame."""

    def from_dates(self, dates: list[date]) -> DF:
        """Build a DataFrame with a single ``date`` column."""
        ...

    def from_intervals(self, intervals: list[Interval]) -> DF:
        """Build a DataFrame with ``start`` and ``end`` columns.

        Unbounded sides are stored as nulls.
        """
        ...

    def empty(self) -> DF:
        """Return an empty DataFrame."""
        ...

    def is_empty(self, df: DF) -> bool:
        """Check if DataFrame is empty."""
        ...
