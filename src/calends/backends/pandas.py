"""Pandas backend implementation."""

from datetime import date

import pandas as pd

from calends.interval import Interval


class PandasBackend:
    """Backend implementation for pandas DataFrames.

    Dates are stored as ``datetime64`` columns; unbounded interval sides
    become ``NaT``.
    """

    def from_dates(self, dates: list[date]) -> pd.DataFrame:
        """Build a DataFrame with a single ``date`` column."""
        return pd.DataFrame({"date": pd.to_datetime(list(dates))})

    def from_intervals(self, intervals: list[Interval]) -> pd.DataFrame:
        """Build a DataFrame with ``start`` and ``end`` columns."""
        starts = [i.start_opt() for i in intervals]
        ends = [i.end_opt() for i in intervals]
        return pd.DataFrame({
            "start": pd.to_datetime(starts),
            "end": pd.to_datetime(ends),
        })

    def empty(self) -> pd.DataFrame:
        """Return an empty DataFrame."""
        return self.from_dates([])

    def is_empty(self, df: pd.DataFrame) -> bool:
        """Check if DataFrame is empty."""
        return df.empty
