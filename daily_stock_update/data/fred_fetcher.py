"""FRED API fetcher for macroeconomic indicators."""

import logging
from datetime import date
from typing import Iterable

import httpx
import pandas as pd

from daily_stock_update.config import Settings, FRED_INDICATORS
from daily_stock_update.models.market_data import Series


logger = logging.getLogger(__name__)


class FredFetcher:
    """Fetches indicator observations from the FRED API."""

    BASE_URL = "https://api.stlouisfed.org/fred"

    def __init__(
        self, settings: Settings | None = None, client: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FredFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _fetch_observations(
        self,
        series_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> pd.DataFrame:
        """
        Fetch raw observations from FRED.

        Returns:
            DataFrame with date index and value column
        """
        params = {
            "series_id": series_id,
            "api_key": self.settings.fred_api_key,
            "file_type": "json",
        }
        if start_date:
            params["observation_start"] = start_date.isoformat()
        if end_date:
            params["observation_end"] = end_date.isoformat()

        response = self.client.get(
            f"{self.BASE_URL}/series/observations",
            params=params,
        )
        response.raise_for_status()
        data = response.json()

        observations = data.get("observations", [])
        if not observations:
            return pd.DataFrame(columns=["value"])

        df = pd.DataFrame(observations)
        df["date"] = pd.to_datetime(df["date"])
        # FRED marks missing values with "."
        df["value"] = pd.to_numeric(df["value"], errors="coerce")
        df = df[["date", "value"]].dropna()
        df.set_index("date", inplace=True)

        return df

    def fetch_series(
        self,
        series_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Series:
        """
        Fetch a single indicator.

        Args:
            series_id: FRED series ID
            start_date: First observation date (inclusive)
            end_date: Last observation date (inclusive)

        Returns:
            Series in ascending date order
        """
        logger.info(f"Fetching {series_id}...")
        df = self._fetch_observations(series_id, start_date, end_date)
        series = Series.from_frame(series_id, df.sort_index())
        logger.info(f"  {series_id}: {len(series)} observations")
        return series

    def fetch_all(
        self,
        series_ids: Iterable[str] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, Series]:
        """
        Fetch several indicators, skipping the ones that fail.

        Args:
            series_ids: FRED series IDs (defaults to FRED_INDICATORS)

        Returns:
            Dict mapping series_id to Series
        """
        results = {}
        errors = {}

        for series_id in series_ids or FRED_INDICATORS:
            try:
                results[series_id] = self.fetch_series(series_id, start_date, end_date)
            except httpx.HTTPStatusError as e:
                logger.error(f"HTTP error fetching {series_id}: {e.response.status_code}")
                errors[series_id] = str(e)
            except httpx.HTTPError as e:
                logger.error(f"Error fetching {series_id}: {e}")
                errors[series_id] = str(e)

        if errors:
            logger.warning(f"Failed to fetch {len(errors)} series: {list(errors.keys())}")

        return results
