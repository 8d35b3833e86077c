"""Shared fixtures for the daily stock update tests."""

from datetime import date, timedelta

import pytest

from daily_stock_update.config import Settings
from daily_stock_update.models.market_data import Observation, Series


def make_series(identifier, pairs):
    """Build a Series from (date, value) pairs."""
    return Series(identifier, tuple(Observation(d, float(v)) for d, v in pairs))


@pytest.fixture
def january_february():
    """Closes on Jan 1/10/20/31 and Feb 1."""
    return make_series(
        "TEST",
        [
            (date(2024, 1, 1), 10),
            (date(2024, 1, 10), 12),
            (date(2024, 1, 20), 9),
            (date(2024, 1, 31), 15),
            (date(2024, 2, 1), 20),
        ],
    )


@pytest.fixture
def daily_series():
    """Two years of weekday closes rising by one per day."""
    start = date(2023, 1, 2)
    pairs = []
    value = 100.0
    for i in range(730):
        d = start + timedelta(days=i)
        if d.weekday() < 5:
            pairs.append((d, value))
            value += 1.0
    return make_series("DAILY", pairs)


@pytest.fixture
def settings():
    """Settings with a dummy FRED key."""
    return Settings(fred_api_key="test-key", request_timeout=5.0)
