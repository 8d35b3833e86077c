"""Moving average variants over a single series."""

from __future__ import annotations

import numpy as np
import pandas as pd

from daily_stock_update.exceptions import DivisionByZeroError, InvalidInputError
from daily_stock_update.models.market_data import MovingAverageKind, Series
from daily_stock_update.transforms.validation import as_series, check_increasing


def _ema(values: pd.Series, window: int) -> pd.Series:
    """
    Exponential moving average seeded with the SMA of the first window.

    Leading NaNs (from an upstream average) are skipped before seeding.
    """
    out = pd.Series(np.nan, index=values.index, dtype=float)
    clean = values.dropna()
    if len(clean) < window:
        return out

    alpha = 2.0 / (window + 1)
    arr = clean.to_numpy(dtype=float)
    result = np.full(len(arr), np.nan)
    result[window - 1] = arr[:window].mean()
    for i in range(window, len(arr)):
        result[i] = alpha * arr[i] + (1 - alpha) * result[i - 1]

    out.loc[clean.index] = result
    return out


def _sma(values: pd.Series, window: int) -> pd.Series:
    return values.rolling(window=window).mean()


def _wma(values: pd.Series, window: int) -> pd.Series:
    weights = np.arange(1, window + 1, dtype=float)
    return values.rolling(window=window).apply(
        lambda x: np.dot(x, weights) / weights.sum(), raw=True
    )


def _dema(values: pd.Series, window: int) -> pd.Series:
    ema = _ema(values, window)
    return 2 * ema - _ema(ema, window)


def _zlema(values: pd.Series, window: int) -> pd.Series:
    # De-lag the input before smoothing
    lag = (window - 1) // 2
    adjusted = 2 * values - values.shift(lag)
    return _ema(adjusted, window)


def _rolling_volume(volume: pd.Series, window: int) -> pd.Series:
    total = volume.rolling(window=window).sum()
    if (total.dropna() == 0).any():
        raise DivisionByZeroError(f"Zero total volume within a {window}-period window")
    return total


def _vwma(values: pd.Series, window: int, volume: pd.Series) -> pd.Series:
    total = _rolling_volume(volume, window)
    return (values * volume).rolling(window=window).sum() / total


def _evwma(values: pd.Series, window: int, volume: pd.Series) -> pd.Series:
    total = _rolling_volume(volume, window)
    out = pd.Series(np.nan, index=values.index, dtype=float)
    if len(values) < window:
        return out

    prices = values.to_numpy(dtype=float)
    vols = volume.to_numpy(dtype=float)
    sums = total.to_numpy(dtype=float)
    result = np.full(len(prices), np.nan)
    result[window - 1] = prices[window - 1]
    for i in range(window, len(prices)):
        result[i] = ((sums[i] - vols[i]) * result[i - 1] + vols[i] * prices[i]) / sums[i]

    out[:] = result
    return out


_PRICE_ONLY = {
    MovingAverageKind.SMA: _sma,
    MovingAverageKind.EMA: _ema,
    MovingAverageKind.WMA: _wma,
    MovingAverageKind.DEMA: _dema,
    MovingAverageKind.ZLEMA: _zlema,
}

_VOLUME_WEIGHTED = {
    MovingAverageKind.VWMA: _vwma,
    MovingAverageKind.EVWMA: _evwma,
}


def compute_moving_average(
    series: Series,
    kind: MovingAverageKind,
    window: int,
    volume: Series | None = None,
) -> Series:
    """
    Compute a moving average of the given kind.

    Args:
        series: Levels in strictly increasing timestamp order
        kind: Moving average variant
        window: Number of trailing observations (>= 1)
        volume: Volume series with the same timestamps, for VWMA/EVWMA

    Returns:
        Series holding only the points where the average is defined
    """
    if not isinstance(kind, MovingAverageKind):
        raise InvalidInputError(f"Unknown moving average kind: {kind!r}")
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise InvalidInputError(f"window must be a positive integer, got {window!r}")

    series = as_series(series)
    check_increasing(series)
    if len(series) == 0:
        return Series(series.identifier)

    values = series.to_pandas()

    if kind.needs_volume:
        if volume is None:
            raise InvalidInputError(f"{kind.name} requires a volume series")
        volume = as_series(volume)
        if volume.timestamps != series.timestamps:
            raise InvalidInputError(
                f"{kind.name} volume timestamps do not match {series.identifier or 'series'}"
            )
        averaged = _VOLUME_WEIGHTED[kind](values, window, volume.to_pandas())
    else:
        averaged = _PRICE_ONLY[kind](values, window)

    return Series.from_frame(series.identifier, averaged)
