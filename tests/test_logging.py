"""Tests for logging helpers."""

import pytest
from structlog.testing import capture_logs

from calends import configure_logging, get_logger
from calends.logging import timed_block


class TestLogging:
    """Test logging configuration and timing."""

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("VERBOSE")

    def test_timed_block_merges_fields(self):
        with capture_logs() as logs:
            with timed_block(get_logger(__name__), "block_done") as fields:
                fields["rows"] = 2

        assert logs[0]["event"] == "block_done"
        assert logs[0]["rows"] == 2
        assert logs[0]["log_level"] == "debug"
