"""Module-level configuration for calends defaults."""

import threading
from dataclasses import dataclass
from typing import get_args

from calends.calendar import MonthEndPolicy, PeriodKind


@dataclass
class CalendsConfig:
    """Configuration for calends defaults."""

    month_end_policy: MonthEndPolicy = "clamp"
    default_period_kind: PeriodKind = "month"  # used by Selection.parse


# Module-level singleton
_calends_config: CalendsConfig | None = None
_config_lock = threading.Lock()


def get_calends_config() -> CalendsConfig:
    """Get the global calends configuration singleton."""
    global _calends_config
    if _calends_config is None:
        with _config_lock:
            if _calends_config is None:
                _calends_config = CalendsConfig()
    return _calends_config


def configure_calends(
    month_end_policy: MonthEndPolicy | None = None,
    default_period_kind: PeriodKind | None = None,
) -> None:
    """Configure default calends settings.

    Args:
        month_end_policy: How month arithmetic treats dates on the last day
            of a month. "clamp" keeps the day number and clamps it to the
            target month's length; "preserve" keeps month-end dates on the
            month end (Feb 28 + 1 month = Mar 31).
        default_period_kind: Period that selection rules are evaluated
            against when none is given ("month" or "year").

    Example:
        from calends import configure_calends

        configure_calends(month_end_policy="preserve")
    """
    if month_end_policy is not None and month_end_policy not in get_args(MonthEndPolicy):
        raise ValueError(f"Unknown month end policy: {month_end_policy}")
    if default_period_kind is not None and default_period_kind not in get_args(PeriodKind):
        raise ValueError(f"Unknown period kind: {default_period_kind}")

    config = get_calends_config()
    with _config_lock:
        if month_end_policy is not None:
            config.month_end_policy = month_end_policy
        if default_period_kind is not None:
            config.default_period_kind = default_period_kind


def reset_calends_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _calends_config
    with _config_lock:
        _calends_config = CalendsConfig()
