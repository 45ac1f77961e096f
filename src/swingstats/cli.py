"""Command-line interface for swingstats."""

from __future__ import annotations

import argparse
import sys

from swingstats.config import DATA_SOURCES, Settings
from swingstats.errors import ConfigError
from swingstats.runtime import run


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="How often does a symbol move beyond a percent threshold within N days?"
    )
    parser.add_argument("--key", type=str, help="Tradier API key")
    parser.add_argument("--symbol", type=str, help="Symbol")
    parser.add_argument("--start", type=str, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="End date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--days", type=int, help="Number of calendar days out")
    parser.add_argument(
        "--percent_away",
        "--percent-away",
        dest="percent_away",
        type=float,
        help="Percent away from the starting quote",
    )
    parser.add_argument("--data-source", choices=list(DATA_SOURCES), help="Data source")
    parser.add_argument("--historical-dir", type=str, help="CSV historical data directory")
    parser.add_argument("--results-csv", type=str, help="Write per-window results to this CSV")
    parser.add_argument("--log-level", type=str, help="Logging level")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.key:
        overrides["tradier_api_key"] = args.key
    if args.symbol:
        overrides["symbol"] = args.symbol
    if args.start:
        overrides["start"] = args.start
    if args.end:
        overrides["end"] = args.end
    if args.days is not None:
        overrides["days_out"] = args.days
    if args.percent_away is not None:
        overrides["percent_away"] = args.percent_away
    if args.data_source:
        overrides["data_source"] = args.data_source
    if args.historical_dir:
        overrides["historical_data_dir"] = args.historical_dir
    if args.results_csv:
        overrides["results_csv"] = args.results_csv
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()

    merged = settings.with_overrides(**overrides)
    return merged.require_runnable()


def main() -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 2
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
