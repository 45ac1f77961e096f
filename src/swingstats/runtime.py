"""Runtime wiring: fetch quotes, aggregate windows, report."""

from __future__ import annotations

from swingstats.analysis.stats import window_stats
from swingstats.config import Settings
from swingstats.data.base import QuoteDataProvider
from swingstats.data.csv_data import CsvDataProvider
from swingstats.data.frames import quotes_from_frame
from swingstats.data.tradier_data import TradierHistoryProvider
from swingstats.data.yfinance_data import YFinanceDataProvider
from swingstats.domain.models import SwingStats
from swingstats.errors import SwingStatsError
from swingstats.logging.logger import HumanLogger
from swingstats.reporting import print_stats, write_results_csv


def run(settings: Settings, data_provider: QuoteDataProvider | None = None) -> int:
    """Fetch history for ``settings.symbol`` and print its swing stats."""
    human_logger = HumanLogger(level=settings.log_level)
    provider = data_provider or build_data_provider(settings)
    try:
        analyze(settings, provider, human_logger)
    except (SwingStatsError, OSError) as exc:
        human_logger.error(str(exc))
        return 1
    return 0


def analyze(
    settings: Settings,
    data_provider: QuoteDataProvider,
    human_logger: HumanLogger,
) -> SwingStats:
    """Run one fetch-and-aggregate pass and print the report."""
    human_logger.fetch_started(
        settings.data_source, settings.symbol, settings.start, settings.end
    )
    frame = data_provider.get_bars(settings.symbol, settings.start, settings.end)
    quotes = quotes_from_frame(frame)
    if quotes:
        human_logger.quotes_loaded(settings.symbol, len(quotes), quotes[0].date, quotes[-1].date)
    else:
        human_logger.quotes_loaded(settings.symbol, 0)

    results, stats = window_stats(quotes, settings.days_out, settings.percent_away)
    human_logger.windows_summary(settings.symbol, stats)

    if settings.results_csv:
        path = write_results_csv(results, settings.results_csv)
        human_logger.results_written(path, len(results))

    print_stats(settings.symbol, stats)
    return stats


def build_data_provider(settings: Settings) -> QuoteDataProvider:
    """Build the quote provider selected by ``settings.data_source``."""
    source = settings.data_source
    if source == "csv":
        # With a Tradier key, missing CSVs are downloaded once and cached on disk.
        fallback = build_tradier_provider(settings).get_bars if settings.tradier_api_key else None
        return CsvDataProvider(
            data_dir=settings.historical_data_dir,
            missing_data_fetcher=fallback,
        )
    if source == "yfinance":
        return YFinanceDataProvider()
    return build_tradier_provider(settings)


def build_tradier_provider(settings: Settings) -> TradierHistoryProvider:
    return TradierHistoryProvider(
        api_key=settings.tradier_api_key,
        base_url=settings.tradier_base_url,
        timeout=settings.request_timeout,
    )
