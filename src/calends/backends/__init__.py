"""Backend implementations for materializing recurrences."""

from calends.backends.base import Backend
from calends.backends.pandas import PandasBackend
from calends.backends.polars import PolarsBackend

__all__ = ["Backend", "PandasBackend", "PolarsBackend"]
