"""Configuration settings for the daily stock update."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# Equities tracked in the report
DEFAULT_TICKERS: dict[str, str] = {
    "AAPL": "Apple",
    "MSFT": "Microsoft",
    "AMZN": "Amazon",
    "GOOGL": "Alphabet",
    "SPY": "S&P 500 ETF",
}

# FRED indicators shown next to the equities
FRED_INDICATORS: dict[str, str] = {
    "UNRATE": "Unemployment Rate",
    "CPIAUCSL": "Consumer Price Index",
    "FEDFUNDS": "Federal Funds Rate",
    "DGS10": "10-Year Treasury Yield",
    "GDP": "Gross Domestic Product",
}

# Public survey sheet pulled by the import script
SURVEY_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/"
    "16o68CSXpNWzVVk-rvfjQF20He_2UqopOcxshFo74S4U/edit?usp=sharing"
)


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    survey_sheet_url: str = field(
        default_factory=lambda: os.getenv("SURVEY_SHEET_URL", SURVEY_SHEET_URL)
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("HTTP_TIMEOUT", "30"))
    )

    def validate(self) -> None:
        """Validate settings needed for FRED access."""
        if not self.fred_api_key:
            raise ValueError(
                "FRED_API_KEY not set. Get one at: "
                "https://fred.stlouisfed.org/docs/api/api_key.html"
            )

