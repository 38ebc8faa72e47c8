"""Tests for module-level configuration."""

from datetime import date

import pytest

from calends import (
    Selection,
    configure_calends,
    get_calends_config,
    months,
    reset_calends_config,
)


class TestCalendsConfig:
    """Test the configuration singleton."""

    def test_defaults(self):
        config = get_calends_config()

        assert config.month_end_policy == "clamp"
        assert config.default_period_kind == "month"

    def test_configure_month_end_policy(self):
        """The configured policy applies to duration arithmetic."""
        configure_calends(month_end_policy="preserve")

        assert get_calends_config().month_end_policy == "preserve"
        assert date(2022, 2, 28) + months(1) == date(2022, 3, 31)

    def test_configure_default_period_kind(self):
        configure_calends(default_period_kind="year")

        assert Selection.parse("L3M5KN").period_kind == "year"

    def test_partial_configure_keeps_other_settings(self):
        configure_calends(month_end_policy="preserve")
        configure_calends(default_period_kind="year")

        config = get_calends_config()
        assert config.month_end_policy == "preserve"
        assert config.default_period_kind == "year"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError, match="month end policy"):
            configure_calends(month_end_policy="round")
        with pytest.raises(ValueError, match="period kind"):
            configure_calends(default_period_kind="week")

    def test_reset(self):
        configure_calends(month_end_policy="preserve")
        reset_calends_config()

        assert get_calends_config().month_end_policy == "clamp"
        assert date(2022, 2, 28) + months(1) == date(2022, 3, 28)
