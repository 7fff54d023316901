"""
Central pytest configuration for the Holter clinic tests.

This file provides common fixtures and test markers for both unit and
integration tests.
"""

import os

import pytest

# Keep tests independent of a developer's local .env
os.environ.setdefault("TZ", "UTC")
os.environ.setdefault("LOG_TO_FILE", "false")

from tests.config.markers import *  # noqa: E402,F401,F403
from tests.fixtures.domain_fixtures import *  # noqa: E402,F401,F403


@pytest.fixture
def clean_env(monkeypatch):
    """Remove clinic configuration variables so defaults apply."""
    for name in (
        "OVERDUE_SCAN_INTERVAL_SECONDS",
        "BLOCKED_DATES",
        "INITIAL_RHYTHM_HOLTERS",
        "INITIAL_PRESSURE_HOLTERS",
        "INITIAL_CABLES",
        "LOG_LEVEL",
        "LOG_TO_FILE",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
