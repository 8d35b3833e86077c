"""Daily stock update: price and indicator series, resampled for reporting."""

from daily_stock_update.exceptions import DivisionByZeroError, InvalidInputError
from daily_stock_update.models import (
    AggregationRule,
    MovingAverageKind,
    Observation,
    Period,
    ReturnKind,
    Series,
)
from daily_stock_update.transforms import (
    BatchTransformer,
    TimeSeriesResampler,
    compute_moving_average,
    period_return,
    resample,
)

__all__ = [
    "AggregationRule",
    "BatchTransformer",
    "DivisionByZeroError",
    "InvalidInputError",
    "MovingAverageKind",
    "Observation",
    "Period",
    "ReturnKind",
    "Series",
    "TimeSeriesResampler",
    "compute_moving_average",
    "period_return",
    "resample",
]
