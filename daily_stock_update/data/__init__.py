"""Data fetching and spreadsheet import."""

from .fred_fetcher import FredFetcher
from .yahoo_fetcher import YahooFetcher
from .sheet_import import import_sheet

__all__ = ["FredFetcher", "YahooFetcher", "import_sheet"]
