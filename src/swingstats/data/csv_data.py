"""CSV-backed historical quote provider."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

import pandas as pd

from swingstats.errors import DataProviderError

MissingDataFetcher = Callable[[str, date, date], pd.DataFrame]


class CsvDataProvider:
    """Load daily OHLCV bars from ``<data_dir>/<SYMBOL>.csv`` files.

    With a ``missing_data_fetcher``, absent files are downloaded and cached.
    Downloads record the date span they were requested for in a
    ``<SYMBOL>.span.json`` sidecar; a later request outside that span fetches
    the union of both spans and rewrites the cache.
    """

    date_column_candidates = ("date", "datetime", "timestamp")

    def __init__(
        self,
        data_dir: str,
        missing_data_fetcher: MissingDataFetcher | None = None,
        persist_downloaded_bars: bool = True,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.missing_data_fetcher = missing_data_fetcher
        self.persist_downloaded_bars = persist_downloaded_bars
        self.logger = logging.getLogger("swingstats.data.csv")

    def get_bars(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        path = self._resolve_path(symbol)
        if path is None:
            bars = self._load_missing_data(symbol, start, end)
        else:
            bars = self._read_csv(path, symbol)
            if self.missing_data_fetcher is not None:
                cached_start, cached_end = self._cached_span(path, bars)
                if start < cached_start or end > cached_end:
                    self.logger.warning(
                        "cache for %s covers %s -> %s; refetching for %s -> %s",
                        symbol,
                        cached_start,
                        cached_end,
                        start,
                        end,
                    )
                    bars = self._load_missing_data(
                        symbol,
                        min(start, cached_start),
                        max(end, cached_end),
                        cached=bars,
                    )
        # Rows stamped later in the day still belong to ``end``.
        upper = pd.Timestamp(end) + pd.Timedelta(days=1)
        window = bars.loc[(bars.index >= pd.Timestamp(start)) & (bars.index < upper)]
        if window.empty:
            raise DataProviderError(f"{symbol}: no rows between {start} and {end}")
        return window.copy()

    def _resolve_path(self, symbol: str) -> Path | None:
        bare_symbol = symbol.strip()
        for candidate in (
            self.data_dir / f"{bare_symbol.upper()}.csv",
            self.data_dir / f"{bare_symbol.lower()}.csv",
        ):
            if candidate.exists():
                return candidate
        return None

    def _read_csv(self, path: Path, symbol: str) -> pd.DataFrame:
        try:
            frame = pd.read_csv(path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise DataProviderError(f"Could not read {path}: {exc}") from exc
        return self._normalize_csv(frame, symbol)

    @staticmethod
    def _span_path(path: Path) -> Path:
        return path.with_name(f"{path.stem.upper()}.span.json")

    def _cached_span(self, path: Path, bars: pd.DataFrame) -> tuple[date, date]:
        """Return the span a cached file was fetched for, or its row range."""
        span_path = self._span_path(path)
        if span_path.exists():
            try:
                span = json.loads(span_path.read_text(encoding="utf-8"))
                return date.fromisoformat(span["start"]), date.fromisoformat(span["end"])
            except (OSError, ValueError, KeyError, TypeError):
                self.logger.warning("ignoring unreadable cache span %s", span_path)
        return bars.index.min().date(), bars.index.max().date()

    def _load_missing_data(
        self,
        symbol: str,
        start: date,
        end: date,
        cached: pd.DataFrame | None = None,
    ) -> pd.DataFrame:
        if self.missing_data_fetcher is None:
            raise DataProviderError(f"No CSV found for {symbol} under {self.data_dir}")
        try:
            frame = self.missing_data_fetcher(symbol, start, end)
        except DataProviderError as exc:
            raise DataProviderError(
                f"No cached CSV covers {symbol} {start} -> {end} under {self.data_dir}; "
                f"fallback fetch failed: {exc}"
            ) from exc
        if not isinstance(frame, pd.DataFrame):
            raise DataProviderError(
                f"No cached CSV covers {symbol} under {self.data_dir}; "
                "fallback fetcher returned a non-DataFrame result"
            )
        normalized = self._normalize_ohlcv(frame, symbol)
        if cached is not None:
            merged = pd.concat([cached, normalized])
            normalized = merged[~merged.index.duplicated(keep="last")].sort_index()
        if self.persist_downloaded_bars:
            self._persist_downloaded_bars(symbol, normalized, start, end)
        return normalized

    def _persist_downloaded_bars(
        self,
        symbol: str,
        bars: pd.DataFrame,
        start: date,
        end: date,
    ) -> None:
        path = self.data_dir / f"{symbol.strip().upper()}.csv"
        path.parent.mkdir(parents=True, exist_ok=True)
        output = bars.reset_index()
        first_column = str(output.columns[0])
        if first_column != "date":
            output = output.rename(columns={first_column: "date"})
        output.to_csv(path, index=False)
        span = {"start": start.isoformat(), "end": end.isoformat()}
        self._span_path(path).write_text(json.dumps(span, sort_keys=True), encoding="utf-8")
        self.logger.debug("cached %s rows for %s at %s", len(output), symbol, path)

    def _normalize_csv(self, frame: pd.DataFrame, symbol: str) -> pd.DataFrame:
        lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
        date_column = self._pick_date_column(lower_to_original)
        normalized = frame.copy()
        try:
            normalized.index = pd.to_datetime(normalized[date_column], utc=False)
        except (ValueError, TypeError) as exc:
            raise DataProviderError(f"{symbol}: CSV has malformed dates") from exc
        return self._normalize_ohlcv(normalized, symbol)

    def _normalize_ohlcv(self, frame: pd.DataFrame, symbol: str) -> pd.DataFrame:
        lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
        rename_map = self._build_ohlcv_rename_map(lower_to_original, symbol)
        normalized = frame.rename(columns=rename_map)
        index = pd.DatetimeIndex(normalized.index)
        if index.tz is not None:
            # Keep exchange-local wall dates; the window math is calendar based.
            index = index.tz_localize(None)
        normalized.index = index
        normalized.index.name = "date"
        normalized = normalized.sort_index()
        normalized = normalized[["open", "high", "low", "close", "volume"]].copy()
        normalized = normalized.apply(pd.to_numeric, errors="coerce")
        normalized = normalized.dropna(subset=["open", "high", "low", "close"]).copy()
        normalized["volume"] = normalized["volume"].fillna(0.0)
        if normalized.empty:
            raise DataProviderError(f"{symbol}: data has no valid OHLCV rows")
        return normalized

    def _pick_date_column(self, lower_to_original: dict[str, str]) -> str:
        for candidate in self.date_column_candidates:
            if candidate in lower_to_original:
                return lower_to_original[candidate]
        candidates = ", ".join(self.date_column_candidates)
        raise DataProviderError(f"CSV missing date column. Expected one of: {candidates}")

    @staticmethod
    def _build_ohlcv_rename_map(
        lower_to_original: dict[str, str],
        symbol: str,
    ) -> dict[str, str]:
        rename_map: dict[str, str] = {}
        for name in ("open", "high", "low", "close", "volume"):
            source = lower_to_original.get(name)
            if source is None:
                raise DataProviderError(f"{symbol}: CSV missing required column '{name}'")
            rename_map[source] = name
        return rename_map
