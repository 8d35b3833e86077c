"""Tests for the Series data model."""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from daily_stock_update.models.market_data import MovingAverageKind, Observation, Series


class TestSeries:

    def test_sequence_behaviour(self, january_february):
        assert len(january_february) == 5
        assert january_february[0] == Observation(date(2024, 1, 1), 10.0)
        assert january_february[-1].value == 20.0

        head = january_february[:2]
        assert isinstance(head, Series)
        assert head.identifier == "TEST"
        assert head.values == [10.0, 12.0]

    def test_observations_are_immutable(self, january_february):
        with pytest.raises(AttributeError):
            january_february[0].value = 1.0

    def test_list_input_stored_as_tuple(self):
        series = Series("X", [Observation(date(2024, 1, 1), 1.0)])
        assert isinstance(series.observations, tuple)

    def test_from_pairs(self):
        series = Series.from_pairs("X", [(date(2024, 1, 1), 1), (date(2024, 1, 2), "2.5")])
        assert series.values == [1.0, 2.5]

    def test_frame_round_trip(self, january_february):
        df = january_february.to_frame()

        assert list(df.columns) == ["value"]
        assert isinstance(df.index, pd.DatetimeIndex)
        assert Series.from_frame("TEST", df) == january_february

    def test_from_frame_drops_missing(self):
        df = pd.DataFrame(
            {"value": [1.0, np.nan, 3.0]},
            index=pd.to_datetime(["2024-01-01", "2024-01-02", "2024-01-03"]),
        )

        series = Series.from_frame("GAP", df)

        assert series.timestamps == [date(2024, 1, 1), date(2024, 1, 3)]

    def test_from_pandas_series(self):
        values = pd.Series([5.0], index=pd.to_datetime(["2024-03-01"]))

        assert list(Series.from_frame("S", values)) == [Observation(date(2024, 3, 1), 5.0)]

    def test_empty_frame(self):
        assert Series("E").to_frame().empty
        assert len(Series.from_frame("E", pd.DataFrame(columns=["value"]))) == 0

    def test_to_pandas_named(self, january_february):
        values = january_february.to_pandas()

        assert values.name == "TEST"
        assert values.iloc[-1] == 20.0


def test_volume_kinds():
    assert MovingAverageKind.VWMA.needs_volume
    assert MovingAverageKind.EVWMA.needs_volume
    assert not MovingAverageKind.SMA.needs_volume
