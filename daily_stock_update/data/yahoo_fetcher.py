"""Yahoo Finance fetcher for equity price history."""

import logging
from datetime import date, timedelta
from typing import Iterable

import pandas as pd
import yfinance as yf

from daily_stock_update.config import Settings, DEFAULT_TICKERS
from daily_stock_update.models.market_data import Series


logger = logging.getLogger(__name__)


def _ticker_frame(data: pd.DataFrame, ticker: str) -> pd.DataFrame:
    """Pull one ticker's columns out of a yfinance download."""
    if not isinstance(data.columns, pd.MultiIndex):
        return data
    if ticker in data.columns.get_level_values(0):
        return data[ticker]
    return data.xs(ticker, axis=1, level=-1)


class YahooFetcher:
    """Fetches adjusted daily prices from Yahoo Finance."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    def _download(
        self,
        tickers: list[str],
        start_date: date,
        end_date: date | None = None,
    ) -> pd.DataFrame:
        # yfinance treats `end` as exclusive
        end = (end_date + timedelta(days=1)).isoformat() if end_date else None
        return yf.download(
            tickers if len(tickers) > 1 else tickers[0],
            start=start_date.isoformat(),
            end=end,
            progress=False,
            auto_adjust=True,
            group_by="ticker",
            threads=True,
        )

    def fetch_prices(
        self,
        ticker: str,
        start_date: date,
        end_date: date | None = None,
        field: str = "Close",
    ) -> Series:
        """
        Fetch one column of daily history for a ticker.

        Args:
            ticker: Yahoo ticker symbol
            start_date: First trading day to include
            end_date: Last trading day to include (None = latest)
            field: Column to extract (Close, Open, High, Low, Volume)

        Returns:
            Series in ascending date order, empty if Yahoo returned nothing
        """
        logger.info(f"Downloading {ticker} {field} from {start_date}...")
        data = self._download([ticker], start_date, end_date)

        if data is None or data.empty:
            logger.warning(f"  {ticker}: No data")
            return Series(ticker)

        frame = _ticker_frame(data, ticker)
        if field not in frame.columns:
            raise KeyError(f"{ticker}: column {field!r} missing from download")

        values = frame[field].dropna().sort_index()
        values.index = pd.to_datetime(values.index)
        series = Series.from_frame(ticker, values)
        logger.info(f"  {ticker}: {len(series)} observations")
        return series

    def fetch_volume(
        self, ticker: str, start_date: date, end_date: date | None = None
    ) -> Series:
        """Fetch daily traded volume, for volume-weighted averages."""
        return self.fetch_prices(ticker, start_date, end_date, field="Volume")

    def fetch_all(
        self,
        tickers: Iterable[str] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        field: str = "Close",
    ) -> dict[str, Series]:
        """
        Fetch all tickers in a single batch request.

        Tickers that fail to parse are logged and left out of the result. A
        failed batch download is logged and yields an empty dict.

        Returns:
            Dict mapping ticker to Series
        """
        tickers = list(tickers or DEFAULT_TICKERS)
        start_date = start_date or date.today() - timedelta(days=365)
        logger.info(f"Batch downloading {len(tickers)} tickers...")

        try:
            data = self._download(tickers, start_date, end_date)
        except Exception as e:
            logger.error(f"Batch download failed: {e}")
            return {}

        if data is None or data.empty:
            logger.error("No data returned from Yahoo Finance")
            return {}

        results = {}
        errors = {}

        for ticker in tickers:
            try:
                frame = _ticker_frame(data, ticker)
                values = frame[field].dropna().sort_index()
                if values.empty:
                    logger.warning(f"  {ticker}: No data")
                    continue
                values.index = pd.to_datetime(values.index)
                results[ticker] = Series.from_frame(ticker, values)
                logger.info(f"  {ticker}: {len(results[ticker])} observations")
            except KeyError as e:
                logger.warning(f"  {ticker}: Error processing - {e}")
                errors[ticker] = str(e)

        if errors:
            logger.warning(f"Failed to parse {len(errors)} tickers: {list(errors.keys())}")

        return results
