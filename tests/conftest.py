"""Pytest configuration and shared fixtures."""

import pytest

from calends.config import reset_calends_config


@pytest.fixture(autouse=True)
def reset_calends_config_for_all_tests():
    """Reset the configuration before and after each test for isolation.

    The configuration is a module-level singleton that persists across tests.
    This fixture ensures each test starts with the default policies.
    """
    reset_calends_config()
    yield
    reset_calends_config()
