"""Settings and default instrument lists."""

from daily_stock_update.config.settings import (
    DEFAULT_TICKERS,
    FRED_INDICATORS,
    SURVEY_SHEET_URL,
    Settings,
)

__all__ = ["Settings", "DEFAULT_TICKERS", "FRED_INDICATORS", "SURVEY_SHEET_URL"]
