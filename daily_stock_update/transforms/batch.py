"""Apply series transforms across many instruments."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from daily_stock_update.exceptions import TimeSeriesError
from daily_stock_update.models.market_data import (
    AggregationRule,
    MovingAverageKind,
    Period,
    ReturnKind,
    Series,
)
from daily_stock_update.transforms.moving_average import compute_moving_average
from daily_stock_update.transforms.resampler import TimeSeriesResampler


logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Per-identifier outputs and failures from one batch run."""

    results: dict[str, Series] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class BatchTransformer:
    """Maps transforms over a collection keyed by instrument identifier."""

    def __init__(self, resampler: TimeSeriesResampler | None = None) -> None:
        self.resampler = resampler or TimeSeriesResampler()

    def _apply(
        self, collection: Mapping[str, Series], transform: Callable[[str, Series], Series]
    ) -> BatchResult:
        batch = BatchResult()

        for identifier, series in collection.items():
            try:
                batch.results[identifier] = transform(identifier, series)
            except TimeSeriesError as e:
                logger.warning(f"  {identifier}: {type(e).__name__} - {e}")
                batch.errors[identifier] = str(e)

        if batch.errors:
            logger.warning(
                f"Failed to transform {len(batch.errors)} series: {list(batch.errors.keys())}"
            )

        return batch

    def run(
        self,
        collection: Mapping[str, Series],
        period: Period,
        rule: AggregationRule = AggregationRule.LAST,
        return_kind: ReturnKind | None = None,
    ) -> BatchResult:
        """
        Resample every series, optionally converting the result to returns.

        Args:
            collection: Series keyed by identifier
            period: Target period for all series
            rule: Aggregation rule for all series
            return_kind: If given, period returns are computed after resampling

        Returns:
            BatchResult with successful series and per-identifier error messages
        """
        def transform(identifier: str, series: Series) -> Series:
            resampled = self.resampler.resample(series, period, rule)
            if return_kind is None:
                return resampled
            return self.resampler.period_return(resampled, return_kind)

        return self._apply(collection, transform)

    def moving_averages(
        self,
        collection: Mapping[str, Series],
        kind: MovingAverageKind,
        window: int,
        volumes: Mapping[str, Series] | None = None,
    ) -> BatchResult:
        """Compute one moving average per series, pairing volume by identifier."""
        volumes = volumes or {}

        def transform(identifier: str, series: Series) -> Series:
            return compute_moving_average(
                series, kind, window, volume=volumes.get(identifier)
            )

        return self._apply(collection, transform)
