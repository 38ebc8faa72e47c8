"""Calends - Calendar arithmetic, intervals and recurrence rules over dates."""

from calends.backends.pandas import PandasBackend
from calends.backends.polars import PolarsBackend
from calends.calendar import (
    CalendarBasis,
    MonthEndPolicy,
    Period,
    PeriodKind,
    days_in_month,
    days_in_year,
    has_week_53,
    period_ranges,
    shift_months,
    weeks_in_year,
)
from calends.config import (
    CalendsConfig,
    configure_calends,
    get_calends_config,
    reset_calends_config,
)
from calends.duration import RelativeDuration, days, months, weeks
from calends.errors import (
    CalendsError,
    GrammarError,
    IntervalConstructionError,
    PositionWithoutCandidates,
    RecurrenceStateError,
    SelectionError,
)
from calends.interval import (
    ClosedInterval,
    Interval,
    UnboundedEndInterval,
    UnboundedStartInterval,
    successive,
)
from calends.logging import configure_logging, get_logger
from calends.recurrence import Recurrence
from calends.rule import (
    Biweekly,
    Daily,
    Monthly,
    Quarterly,
    Rule,
    Selection,
    Weekly,
    Yearly,
    occurrence,
    offset,
)
from calends.selection import (
    DayOfMonth,
    Month,
    OrdinalDay,
    Position,
    SelectionRule,
    Week,
    Weekday,
    WithInterval,
)

__all__ = [
    # Durations
    "RelativeDuration",
    "months",
    "weeks",
    "days",
    # Intervals
    "Interval",
    "ClosedInterval",
    "UnboundedStartInterval",
    "UnboundedEndInterval",
    "successive",
    # Rules and recurrence
    "Rule",
    "Daily",
    "Biweekly",
    "Weekly",
    "Monthly",
    "Quarterly",
    "Yearly",
    "Selection",
    "offset",
    "occurrence",
    "Recurrence",
    # Selection rules
    "SelectionRule",
    "Month",
    "Week",
    "DayOfMonth",
    "Weekday",
    "OrdinalDay",
    "Position",
    "WithInterval",
    # Calendar
    "CalendarBasis",
    "MonthEndPolicy",
    "Period",
    "PeriodKind",
    "days_in_month",
    "days_in_year",
    "has_week_53",
    "period_ranges",
    "shift_months",
    "weeks_in_year",
    # Backends
    "PandasBackend",
    "PolarsBackend",
    # Errors
    "CalendsError",
    "GrammarError",
    "IntervalConstructionError",
    "PositionWithoutCandidates",
    "RecurrenceStateError",
    "SelectionError",
    # Config
    "CalendsConfig",
    "configure_calends",
    "get_calends_config",
    "reset_calends_config",
    # Logging
    "configure_logging",
    "get_logger",
]
__version__ = "0.1.0"
