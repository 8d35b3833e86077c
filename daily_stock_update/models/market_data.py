"""Data models for market time series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from collections.abc import Iterator, Sequence

import pandas as pd


class Period(Enum):
    """Target granularity for resampling."""
    DAILY = "daily"
    WEEKLY = "weekly"  # ISO week, Monday start
    MONTHLY = "monthly"
    YEARLY = "yearly"


class AggregationRule(Enum):
    """How observations falling in one period collapse to one."""
    FIRST = "first"
    LAST = "last"  # Closing-price semantics
    MIN = "min"
    MAX = "max"
    SUM = "sum"


class ReturnKind(Enum):
    """Return formula applied between successive observations."""
    SIMPLE = "simple"
    LOGARITHMIC = "log"


class MovingAverageKind(Enum):
    """Supported moving average variants."""
    SMA = "sma"
    EMA = "ema"
    WMA = "wma"
    DEMA = "dema"
    ZLEMA = "zlema"
    VWMA = "vwma"  # Needs volume
    EVWMA = "evwma"  # Needs volume

    @property
    def needs_volume(self) -> bool:
        return self in (MovingAverageKind.VWMA, MovingAverageKind.EVWMA)


@dataclass(frozen=True)
class Observation:
    """Single dated value from a price or indicator series."""

    timestamp: date
    value: float


@dataclass(frozen=True)
class Series(Sequence[Observation]):
    """Ordered observations for one instrument or indicator."""

    identifier: str = ""
    observations: tuple[Observation, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store an immutable tuple
        if not isinstance(self.observations, tuple):
            object.__setattr__(self, "observations", tuple(self.observations))

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Series(self.identifier, self.observations[index])
        return self.observations[index]

    @property
    def timestamps(self) -> list[date]:
        return [obs.timestamp for obs in self.observations]

    @property
    def values(self) -> list[float]:
        return [obs.value for obs in self.observations]

    @classmethod
    def from_pairs(cls, identifier: str, pairs) -> Series:
        """Build a series from (date, value) pairs."""
        return cls(identifier, tuple(Observation(d, float(v)) for d, v in pairs))

    @classmethod
    def from_frame(
        cls, identifier: str, df: pd.DataFrame | pd.Series, column: str = "value"
    ) -> Series:
        """
        Build a series from a DataFrame (or pandas Series) with a date index.

        Rows with missing values are dropped.
        """
        values = df[column] if isinstance(df, pd.DataFrame) else df
        values = values.dropna()
        if values.empty:
            return cls(identifier)

        index = pd.to_datetime(values.index)
        return cls(
            identifier,
            tuple(
                Observation(ts.date(), float(val))
                for ts, val in zip(index, values.to_numpy())
            ),
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a DataFrame.

        Returns:
            DataFrame with DatetimeIndex named 'date' and 'value' column
        """
        if not self.observations:
            return pd.DataFrame(columns=["value"])

        df = pd.DataFrame(
            {"value": self.values},
            index=pd.DatetimeIndex(pd.to_datetime(self.timestamps), name="date"),
        )
        return df

    def to_pandas(self) -> pd.Series:
        """Convert to a float pandas Series named after the identifier."""
        return self.to_frame()["value"].astype(float).rename(self.identifier or None)
