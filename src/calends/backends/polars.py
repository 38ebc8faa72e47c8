"""Polars backend implementation."""

from datetime import date

import polars as pl

from calends.interval import Interval


class PolarsBackend:
    """Backend implementation for polars DataFrames."""

    def from_dates(self, dates: list[date]) -> pl.DataFrame:
        """Build a DataFrame with a single ``date`` column."""
        return pl.DataFrame({"date": list(dates)}, schema={"date": pl.Date})

    def from_intervals(self, intervals: list[Interval]) -> pl.DataFrame:
        """Build a DataFrame with ``start`` and ``end`` columns.

        Unbounded sides are stored as nulls.
        """
        return pl.DataFrame(
            {
                "start": [i.start_opt() for i in intervals],
                "end": [i.end_opt() for i in intervals],
            },
            schema={"start": pl.Date, "end": pl.Date},
        )

    def empty(self) -> pl.DataFrame:
        """Return an empty DataFrame."""
        return self.from_dates([])

    def is_empty(self, df: pl.DataFrame) -> bool:
        """Check if DataFrame is empty."""
        return df.is_empty()
