"""Import a public Google Sheet into a flat CSV file."""

import io
import logging
import re
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import httpx
import pandas as pd

from daily_stock_update.config import Settings


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("survey_data.csv")

_SHEET_ID = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")


def sheet_csv_url(url: str) -> str:
    """
    Convert a Google Sheets share/edit URL into its CSV export URL.

    The worksheet `gid` is kept when the URL names one, otherwise the
    first worksheet is exported.
    """
    parsed = urlparse(url)
    match = _SHEET_ID.search(parsed.path)
    if parsed.netloc != "docs.google.com" or not match:
        raise ValueError(f"Not a Google Sheets URL: {url}")

    export = f"https://docs.google.com/spreadsheets/d/{match.group(1)}/export?format=csv"

    gid = parse_qs(parsed.query).get("gid") or parse_qs(parsed.fragment).get("gid")
    if gid:
        export += f"&gid={gid[0]}"
    return export


def read_sheet(url: str, client: httpx.Client) -> pd.DataFrame:
    """Download a publicly shared sheet without authentication."""
    response = client.get(sheet_csv_url(url), follow_redirects=True)
    response.raise_for_status()
    return pd.read_csv(io.StringIO(response.text))


def import_sheet(
    url: str | None = None,
    output_path: Path | str = DEFAULT_OUTPUT,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> Path:
    """
    Pull the sheet and write it to CSV.

    Args:
        url: Sheet URL (defaults to the configured survey sheet)
        output_path: Destination CSV file
        client: HTTP client to reuse; one is created and closed otherwise

    Returns:
        Path of the written file
    """
    settings = settings or Settings()
    url = url or settings.survey_sheet_url
    output_path = Path(output_path)

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=settings.request_timeout)

    try:
        logger.info(f"Reading sheet {url}")
        df = read_sheet(url, client)
    finally:
        if owns_client:
            client.close()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"  Wrote {len(df)} rows to {output_path}")
    return output_path


def main() -> None:
    """CLI entry point for the scheduled sheet import."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Import a public Google Sheet to CSV")
    parser.add_argument(
        "--url",
        type=str,
        help="Sheet URL (default: SURVEY_SHEET_URL setting)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Output CSV path",
    )
    args = parser.parse_args()

    try:
        import_sheet(args.url, args.output)
    except pd.errors.EmptyDataError:
        print("Sheet is empty: nothing to write")
        sys.exit(1)
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Download error: {e.response.status_code} - {e.request.url}")
        sys.exit(1)


if __name__ == "__main__":
    main()
