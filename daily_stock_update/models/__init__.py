"""Time series data models."""

from daily_stock_update.models.market_data import (
    AggregationRule,
    MovingAverageKind,
    Observation,
    Period,
    ReturnKind,
    Series,
)

__all__ = [
    "AggregationRule",
    "MovingAverageKind",
    "Observation",
    "Period",
    "ReturnKind",
    "Series",
]
