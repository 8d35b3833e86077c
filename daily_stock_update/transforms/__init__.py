"""Resampling, return and moving average transforms."""

from daily_stock_update.transforms.batch import BatchResult, BatchTransformer
from daily_stock_update.transforms.moving_average import compute_moving_average
from daily_stock_update.transforms.resampler import (
    TimeSeriesResampler,
    period_return,
    resample,
)

__all__ = [
    "BatchResult",
    "BatchTransformer",
    "TimeSeriesResampler",
    "compute_moving_average",
    "period_return",
    "resample",
]
