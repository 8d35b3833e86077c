"""Build the daily stock update tables.

Pipeline: fetch prices and indicators, resample each series to the report
period, derive period returns and moving averages, then lay the results
out as tables for the renderer.
"""

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Mapping

import pandas as pd

from daily_stock_update.config import Settings, DEFAULT_TICKERS
from daily_stock_update.models.market_data import (
    AggregationRule,
    MovingAverageKind,
    Period,
    ReturnKind,
    Series,
)
from daily_stock_update.transforms.batch import BatchResult, BatchTransformer


logger = logging.getLogger(__name__)


def build_return_table(results: Mapping[str, Series]) -> pd.DataFrame:
    """
    Align several series into one table.

    Returns:
        DataFrame indexed by date with one column per identifier
    """
    columns = {
        identifier: series.to_pandas()
        for identifier, series in results.items()
        if len(series) > 0
    }
    if not columns:
        return pd.DataFrame()

    table = pd.concat(columns, axis=1).sort_index()
    table.index.name = "date"
    return table


def build_summary_table(
    prices: Mapping[str, Series], returns: Mapping[str, Series]
) -> pd.DataFrame:
    """
    Summarize each identifier's latest level and its period returns.

    Identifiers missing from `returns` get NaN return statistics.
    """
    rows = []
    for identifier, levels in prices.items():
        if len(levels) == 0:
            continue

        row = {
            "identifier": identifier,
            "as_of": levels[-1].timestamp,
            "last_level": levels[-1].value,
            "periods": 0,
            "last_return": float("nan"),
            "mean_return": float("nan"),
            "best_return": float("nan"),
            "worst_return": float("nan"),
        }

        period_returns = returns.get(identifier)
        if period_returns is not None and len(period_returns) > 0:
            values = pd.Series(period_returns.values, dtype=float)
            row.update(
                periods=len(values),
                last_return=float(values.iloc[-1]),
                mean_return=float(values.mean()),
                best_return=float(values.max()),
                worst_return=float(values.min()),
            )
        rows.append(row)

    if not rows:
        return pd.DataFrame()

    return pd.DataFrame(rows).set_index("identifier")


def build_report(
    series: Mapping[str, Series],
    period: Period = Period.MONTHLY,
    rule: AggregationRule = AggregationRule.LAST,
    return_kind: ReturnKind = ReturnKind.SIMPLE,
    transformer: BatchTransformer | None = None,
) -> dict[str, object]:
    """
    Resample and compute returns for every series.

    Returns:
        Dict with 'levels' and 'returns' BatchResults plus the 'returns_table'
        and 'summary' DataFrames
    """
    transformer = transformer or BatchTransformer()

    levels = transformer.run(series, period, rule)
    returns = transformer.run(series, period, rule, return_kind=return_kind)

    return {
        "levels": levels,
        "returns": returns,
        "returns_table": build_return_table(returns.results),
        "summary": build_summary_table(levels.results, returns.results),
    }


def write_tables(report: Mapping[str, object], output_dir: Path) -> list[Path]:
    """
    Write the report tables as CSV files.

    Args:
        report: Result of build_report
        output_dir: Directory to write into, created if missing

    Returns:
        Paths of the written files
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name in ("returns_table", "summary"):
        path = output_dir / f"{name}.csv"
        report[name].to_csv(path)
        written.append(path)
        logger.info(f"Wrote {path}")

    return written


def _print_errors(label: str, batch: BatchResult) -> None:
    for identifier, message in batch.errors.items():
        print(f"  {label} {identifier}: {message}")


def main() -> None:
    """CLI entry point for the stock update report."""
    import argparse
    import sys

    import httpx

    from daily_stock_update.data.fred_fetcher import FredFetcher
    from daily_stock_update.data.yahoo_fetcher import YahooFetcher

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Daily stock update tables")
    parser.add_argument(
        "--tickers",
        nargs="+",
        default=list(DEFAULT_TICKERS),
        help="Yahoo tickers to include",
    )
    parser.add_argument(
        "--fred",
        nargs="*",
        help="Also include FRED indicators (no IDs = configured defaults)",
    )
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=date.today() - timedelta(days=5 * 365),
        help="Start date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=None,
        help="End date (YYYY-MM-DD), default latest",
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=Period.MONTHLY.value,
    )
    parser.add_argument(
        "--rule",
        choices=[r.value for r in AggregationRule],
        default=AggregationRule.LAST.value,
    )
    parser.add_argument(
        "--returns",
        choices=[k.value for k in ReturnKind],
        default=ReturnKind.SIMPLE.value,
    )
    parser.add_argument(
        "--ma",
        choices=[k.value for k in MovingAverageKind],
        help="Also compute a moving average of daily prices",
    )
    parser.add_argument("--window", type=int, default=20, help="Moving average window")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory to write returns_table.csv and summary.csv into",
    )
    args = parser.parse_args()

    settings = Settings()
    yahoo = YahooFetcher(settings)
    series = yahoo.fetch_all(args.tickers, args.start, args.end)

    if args.fred is not None:
        try:
            with FredFetcher(settings) as fred:
                series.update(fred.fetch_all(args.fred or None, args.start, args.end))
        except ValueError as e:
            print(f"Configuration error: {e}")
            sys.exit(1)
        except httpx.HTTPError as e:
            print(f"FRED error: {e}")
            sys.exit(1)

    if not series:
        print("No data fetched.")
        sys.exit(1)

    transformer = BatchTransformer()
    report = build_report(
        series,
        period=Period(args.period),
        rule=AggregationRule(args.rule),
        return_kind=ReturnKind(args.returns),
        transformer=transformer,
    )

    print(f"\n{args.period.title()} returns ({args.returns})")
    print("=" * 70)
    print(report["returns_table"].to_string(float_format=lambda v: f"{v:8.4f}"))

    print("\nSummary")
    print("-" * 70)
    print(report["summary"].to_string(float_format=lambda v: f"{v:10.4f}"))

    if args.output is not None:
        write_tables(report, args.output)

    if args.ma:
        kind = MovingAverageKind(args.ma)
        volumes = None
        if kind.needs_volume:
            volumes = yahoo.fetch_all(args.tickers, args.start, args.end, field="Volume")
        averages = transformer.moving_averages(series, kind, args.window, volumes)

        print(f"\n{kind.name}({args.window}) latest values")
        print("-" * 70)
        print(build_return_table(averages.results).tail(10).to_string())
        _print_errors("MA", averages)

    _print_errors("Returns", report["returns"])
    if not report["levels"].results:
        sys.exit(1)


if __name__ == "__main__":
    main()
