from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from swingstats.data.csv_data import CsvDataProvider
from swingstats.errors import DataProviderError


def _write_csv(path: Path) -> None:
    frame = pd.DataFrame(
        {
            "Date": ["2025-01-03", "2025-01-01", "2025-01-02", "2025-01-06"],
            "Open": [102.0, 100.0, 101.0, 103.0],
            "High": [103.0, 101.0, 102.0, 104.0],
            "Low": [101.0, 99.0, 100.0, 102.0],
            "Close": [102.5, 100.5, 101.5, 103.5],
            "Volume": [1200.0, 1000.0, None, 1300.0],
        }
    )
    frame.to_csv(path, index=False)


def test_csv_provider_filters_and_sorts_history(tmp_path: Path) -> None:
    _write_csv(tmp_path / "SPY.csv")
    provider = CsvDataProvider(data_dir=str(tmp_path))

    bars = provider.get_bars("spy", date(2025, 1, 1), date(2025, 1, 3))

    assert list(bars.columns) == ["open", "high", "low", "close", "volume"]
    assert len(bars) == 3
    assert float(bars["close"].iloc[0]) == 100.5
    assert float(bars["close"].iloc[-1]) == 102.5
    assert float(bars["volume"].iloc[1]) == 0.0


def test_csv_provider_reports_missing_file(tmp_path: Path) -> None:
    provider = CsvDataProvider(data_dir=str(tmp_path))

    with pytest.raises(DataProviderError, match="No CSV found for QQQ"):
        provider.get_bars("QQQ", date(2025, 1, 1), date(2025, 1, 3))


def test_csv_provider_reports_empty_range(tmp_path: Path) -> None:
    _write_csv(tmp_path / "SPY.csv")
    provider = CsvDataProvider(data_dir=str(tmp_path))

    with pytest.raises(DataProviderError, match="no rows"):
        provider.get_bars("SPY", date(2024, 1, 1), date(2024, 12, 31))


def test_csv_provider_requires_ohlcv_columns(tmp_path: Path) -> None:
    (tmp_path / "SPY.csv").write_text("date,close\n2025-01-01,1.0\n", encoding="utf-8")
    provider = CsvDataProvider(data_dir=str(tmp_path))

    with pytest.raises(DataProviderError, match="open"):
        provider.get_bars("SPY", date(2025, 1, 1), date(2025, 1, 3))


def test_csv_provider_fetches_and_caches_missing_symbol(tmp_path: Path) -> None:
    calls: list[tuple[str, date, date]] = []

    def fetcher(symbol: str, start: date, end: date) -> pd.DataFrame:
        calls.append((symbol, start, end))
        return pd.DataFrame(
            {
                "open": [10.0, 11.0],
                "high": [10.0, 11.0],
                "low": [10.0, 11.0],
                "close": [10.0, 11.0],
                "volume": [5.0, 6.0],
            },
            index=pd.to_datetime(["2025-02-03", "2025-02-04"]),
        )

    provider = CsvDataProvider(data_dir=str(tmp_path / "cache"), missing_data_fetcher=fetcher)

    first = provider.get_bars("AAPL", date(2025, 2, 1), date(2025, 2, 28))
    second = provider.get_bars("AAPL", date(2025, 2, 1), date(2025, 2, 28))

    assert calls == [("AAPL", date(2025, 2, 1), date(2025, 2, 28))]
    assert len(first) == len(second) == 2
    saved = pd.read_csv(tmp_path / "cache" / "AAPL.csv")
    assert list(saved.columns) == ["date", "open", "high", "low", "close", "volume"]


def test_csv_provider_wraps_fallback_failures(tmp_path: Path) -> None:
    def fetcher(symbol: str, start: date, end: date) -> pd.DataFrame:
        raise DataProviderError("Tradier API did not return 200")

    provider = CsvDataProvider(data_dir=str(tmp_path), missing_data_fetcher=fetcher)

    with pytest.raises(DataProviderError, match="fallback fetch failed"):
        provider.get_bars("AAPL", date(2025, 2, 1), date(2025, 2, 28))


def _daily_fetcher(calls: list[tuple[str, date, date]]):
    def fetcher(symbol: str, start: date, end: date) -> pd.DataFrame:
        calls.append((symbol, start, end))
        index = pd.date_range(start, end, freq="D")
        closes = [float(offset) + 1.0 for offset in range(len(index))]
        return pd.DataFrame(
            {
                "open": closes,
                "high": closes,
                "low": closes,
                "close": closes,
                "volume": [1.0] * len(index),
            },
            index=index,
        )

    return fetcher


def test_csv_provider_refetches_when_cache_is_too_narrow(tmp_path: Path) -> None:
    calls: list[tuple[str, date, date]] = []
    provider = CsvDataProvider(data_dir=str(tmp_path), missing_data_fetcher=_daily_fetcher(calls))

    march = provider.get_bars("SPY", date(2020, 3, 1), date(2020, 3, 31))
    year = provider.get_bars("SPY", date(2020, 1, 1), date(2020, 12, 31))

    assert len(march) == 31
    assert calls == [
        ("SPY", date(2020, 3, 1), date(2020, 3, 31)),
        ("SPY", date(2020, 1, 1), date(2020, 12, 31)),
    ]
    assert len(year) == 366
    assert year.index[0].date() == date(2020, 1, 1)
    assert year.index[-1].date() == date(2020, 12, 31)


def test_csv_provider_reuses_cache_inside_fetched_span(tmp_path: Path) -> None:
    calls: list[tuple[str, date, date]] = []
    provider = CsvDataProvider(data_dir=str(tmp_path), missing_data_fetcher=_daily_fetcher(calls))

    provider.get_bars("SPY", date(2020, 1, 1), date(2020, 12, 31))
    june = provider.get_bars("SPY", date(2020, 6, 1), date(2020, 6, 30))

    assert len(calls) == 1
    assert len(june) == 30


def test_csv_provider_merges_cached_rows_with_refetched_span(tmp_path: Path) -> None:
    (tmp_path / "SPY.csv").write_text(
        "date,open,high,low,close,volume\n2020-03-02,50,50,50,50,1\n",
        encoding="utf-8",
    )

    def fetcher(symbol: str, start: date, end: date) -> pd.DataFrame:
        return pd.DataFrame(
            {"open": [60.0], "high": [60.0], "low": [60.0], "close": [60.0], "volume": [2.0]},
            index=pd.to_datetime(["2020-04-01"]),
        )

    provider = CsvDataProvider(data_dir=str(tmp_path), missing_data_fetcher=fetcher)

    bars = provider.get_bars("SPY", date(2020, 3, 1), date(2020, 4, 30))

    assert [float(value) for value in bars["close"]] == [50.0, 60.0]
    assert len(pd.read_csv(tmp_path / "SPY.csv")) == 2


def test_csv_provider_keeps_intraday_rows_on_end_date(tmp_path: Path) -> None:
    (tmp_path / "SPY.csv").write_text(
        "\n".join(
            [
                "datetime,open,high,low,close,volume",
                "2020-01-30 16:00,1,1,1,1.0,10",
                "2020-01-31 16:00,2,2,2,2.0,10",
                "2020-02-01 16:00,3,3,3,3.0,10",
            ]
        ),
        encoding="utf-8",
    )
    provider = CsvDataProvider(data_dir=str(tmp_path))

    bars = provider.get_bars("SPY", date(2020, 1, 30), date(2020, 1, 31))

    assert [float(value) for value in bars["close"]] == [1.0, 2.0]
