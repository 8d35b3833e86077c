"""Period resampling and return calculation for ordered time series.

Both operations are pure: they read the input series and build a new one.
Period boundaries follow the calendar:
- WEEKLY: ISO weeks (Monday start, keyed by ISO year)
- MONTHLY: calendar month
- YEARLY: calendar year
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date
from typing import Callable, Hashable

from daily_stock_update.exceptions import DivisionByZeroError, InvalidInputError
from daily_stock_update.models.market_data import (
    AggregationRule,
    Observation,
    Period,
    ReturnKind,
    Series,
)
from daily_stock_update.transforms.validation import as_series, check_increasing


def _daily_key(d: date) -> Hashable:
    return (d.year, d.month, d.day)


def _weekly_key(d: date) -> Hashable:
    iso = d.isocalendar()
    return (iso[0], iso[1])


def _monthly_key(d: date) -> Hashable:
    return (d.year, d.month)


def _yearly_key(d: date) -> Hashable:
    return d.year


PERIOD_KEYS: dict[Period, Callable[[date], Hashable]] = {
    Period.DAILY: _daily_key,
    Period.WEEKLY: _weekly_key,
    Period.MONTHLY: _monthly_key,
    Period.YEARLY: _yearly_key,
}


def _aggregate(group: list[Observation], rule: AggregationRule) -> Observation:
    if rule is AggregationRule.FIRST:
        return group[0]
    if rule is AggregationRule.LAST:
        return group[-1]
    if rule is AggregationRule.MIN:
        # min() keeps the first of equal values
        return min(group, key=lambda obs: obs.value)
    if rule is AggregationRule.MAX:
        return max(group, key=lambda obs: obs.value)
    if rule is AggregationRule.SUM:
        return Observation(group[-1].timestamp, math.fsum(obs.value for obs in group))
    raise InvalidInputError(f"Unknown aggregation rule: {rule!r}")


class TimeSeriesResampler:
    """Converts level series to coarser periods and to period returns."""

    def resample(
        self,
        series: Series | Sequence[Observation],
        period: Period,
        rule: AggregationRule = AggregationRule.LAST,
    ) -> Series:
        """
        Collapse a series to one observation per period.

        Args:
            series: Observations in strictly increasing timestamp order
            period: Target granularity
            rule: How observations within one period are combined

        Returns:
            Series with one observation per distinct period present in the input

        Raises:
            InvalidInputError: If timestamps are out of order or duplicated,
                or if period/rule are not valid members
        """
        series = as_series(series)
        if not isinstance(period, Period):
            raise InvalidInputError(f"Unknown period: {period!r}")
        if not isinstance(rule, AggregationRule):
            raise InvalidInputError(f"Unknown aggregation rule: {rule!r}")
        check_increasing(series)

        key_of = PERIOD_KEYS[period]
        output: list[Observation] = []
        group: list[Observation] = []
        current_key = None

        # Input is sorted, so each period is one contiguous run
        for obs in series:
            key = key_of(obs.timestamp)
            if group and key != current_key:
                output.append(_aggregate(group, rule))
                group = []
            current_key = key
            group.append(obs)

        if group:
            output.append(_aggregate(group, rule))

        return Series(series.identifier, tuple(output))

    def period_return(
        self,
        series: Series | Sequence[Observation],
        kind: ReturnKind = ReturnKind.SIMPLE,
    ) -> Series:
        """
        Calculate returns between consecutive observations.

        Each return is dated at the later observation of its pair.

        Raises:
            DivisionByZeroError: On a zero base level (simple) or a
                non-positive level (logarithmic)
            InvalidInputError: If kind is not a ReturnKind
        """
        series = as_series(series)
        if not isinstance(kind, ReturnKind):
            raise InvalidInputError(f"Unknown return kind: {kind!r}")

        output: list[Observation] = []
        for prev, curr in zip(series.observations, series.observations[1:]):
            if kind is ReturnKind.SIMPLE:
                if prev.value == 0:
                    raise DivisionByZeroError(
                        f"Zero level on {prev.timestamp}, simple return undefined"
                    )
                value = (curr.value - prev.value) / prev.value
            else:
                if prev.value <= 0 or curr.value <= 0:
                    raise DivisionByZeroError(
                        f"Non-positive level between {prev.timestamp} and "
                        f"{curr.timestamp}, log return undefined"
                    )
                value = math.log(curr.value / prev.value)
            output.append(Observation(curr.timestamp, value))

        return Series(series.identifier, tuple(output))


_default = TimeSeriesResampler()

# Module-level shortcuts
resample = _default.resample
period_return = _default.period_return
