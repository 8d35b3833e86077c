"""Tests for batch transforms across instruments."""

import logging
from datetime import date

import pytest

from daily_stock_update.models.market_data import (
    AggregationRule,
    MovingAverageKind,
    Period,
    ReturnKind,
)
from daily_stock_update.transforms.batch import BatchTransformer

from conftest import make_series


@pytest.fixture
def collection(january_february):
    bad = make_series("BAD", [(date(2024, 2, 1), 1), (date(2024, 1, 1), 2)])
    zero = make_series("ZERO", [(date(2024, 1, 31), 0), (date(2024, 2, 29), 5)])
    return {"TEST": january_february, "BAD": bad, "ZERO": zero}


class TestBatchTransformer:
    """Test suite for BatchTransformer."""

    def test_resample_collects_errors(self, collection, caplog):
        transformer = BatchTransformer()

        with caplog.at_level(logging.WARNING):
            batch = transformer.run(collection, Period.MONTHLY, AggregationRule.LAST)

        assert set(batch.results) == {"TEST", "ZERO"}
        assert set(batch.errors) == {"BAD"}
        assert not batch.ok
        assert batch.results["TEST"].values == [15.0, 20.0]
        assert "BAD" in caplog.text

    def test_returns_isolate_division_errors(self, collection):
        batch = BatchTransformer().run(
            collection, Period.MONTHLY, AggregationRule.LAST, return_kind=ReturnKind.SIMPLE
        )

        assert set(batch.results) == {"TEST"}
        assert set(batch.errors) == {"BAD", "ZERO"}
        assert batch.results["TEST"].values == pytest.approx([5 / 15])

    def test_all_good(self, january_february):
        batch = BatchTransformer().run({"TEST": january_february}, Period.YEARLY)

        assert batch.ok
        assert len(batch.results["TEST"]) == 1

    def test_moving_averages_pair_volume_by_key(self):
        prices = make_series("PX", [(date(2024, 1, 1), 10), (date(2024, 1, 2), 20)])
        volume = make_series("PX", [(date(2024, 1, 1), 1), (date(2024, 1, 2), 1)])
        other = make_series("NOVOL", [(date(2024, 1, 1), 1), (date(2024, 1, 2), 2)])

        batch = BatchTransformer().moving_averages(
            {"PX": prices, "NOVOL": other},
            MovingAverageKind.VWMA,
            2,
            volumes={"PX": volume},
        )

        assert batch.results["PX"].values == pytest.approx([15.0])
        assert "NOVOL" in batch.errors

    def test_moving_averages_isolate_unordered_series(self, january_february):
        dup = make_series(
            "DUP",
            [(date(2024, 1, 1), 1), (date(2024, 1, 1), 2), (date(2024, 1, 2), 3), (date(2024, 1, 3), 4)],
        )

        batch = BatchTransformer().moving_averages(
            {"TEST": january_february, "DUP": dup}, MovingAverageKind.EMA, 2
        )

        assert set(batch.results) == {"TEST"}
        assert set(batch.errors) == {"DUP"}
