"""Input checks shared by the series transforms."""

from __future__ import annotations

from collections.abc import Sequence

from daily_stock_update.exceptions import InvalidInputError
from daily_stock_update.models.market_data import Observation, Series


def as_series(series: Series | Sequence[Observation] | None) -> Series:
    """Wrap a plain sequence of observations; reject None."""
    if series is None:
        raise InvalidInputError("series is required")
    if isinstance(series, Series):
        return series
    return Series("", tuple(series))


def check_increasing(series: Series) -> None:
    """Raise InvalidInputError unless timestamps strictly increase."""
    previous = None
    for obs in series:
        if previous is not None and obs.timestamp <= previous:
            raise InvalidInputError(
                f"{series.identifier or 'series'}: timestamps must be strictly "
                f"increasing ({obs.timestamp} follows {previous})"
            )
        previous = obs.timestamp
