"""Yahoo Finance historical quote provider."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pandas as pd

from swingstats.data.frames import OHLCV_COLUMNS
from swingstats.errors import DataProviderError

# ``Ticker.history`` column names; "Volume" is absent for some indexes.
HISTORY_COLUMNS = {
    "Open": "open",
    "High": "high",
    "Low": "low",
    "Close": "close",
    "Volume": "volume",
}


class YFinanceDataProvider:
    """Fetch daily OHLCV bars from Yahoo Finance via yfinance."""

    def get_bars(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        try:
            import yfinance as yf
        except ImportError as exc:
            raise DataProviderError(
                "yfinance is required for the yfinance data source. Install it with "
                "`pip install yfinance`."
            ) from exc

        ticker = self._resolve_yfinance_symbol(symbol)
        try:
            # yfinance treats ``end`` as exclusive.
            history = yf.Ticker(ticker).history(
                start=start.isoformat(),
                end=(end + timedelta(days=1)).isoformat(),
                interval="1d",
                auto_adjust=False,
                actions=False,
            )
        except Exception as exc:
            raise DataProviderError(
                f"yfinance request failed for {symbol} ({ticker}): {exc}"
            ) from exc
        return self._history_to_frame(history, symbol, ticker)

    @staticmethod
    def _history_to_frame(history: Any, symbol: str, ticker: str) -> pd.DataFrame:
        frame = pd.DataFrame(history) if history is not None else pd.DataFrame()
        if frame.empty:
            raise DataProviderError(f"yfinance returned no rows for {symbol} ({ticker})")
        missing = [name for name in ("Open", "High", "Low", "Close") if name not in frame.columns]
        if missing:
            raise DataProviderError(
                f"yfinance history for {symbol} ({ticker}) missing columns {missing}"
            )

        frame = frame.rename(columns=HISTORY_COLUMNS)
        if "volume" not in frame.columns:
            frame["volume"] = 0.0
        frame = frame[OHLCV_COLUMNS].apply(pd.to_numeric, errors="coerce")

        # Daily bars are stamped at exchange-local midnight; keep that wall date.
        index = pd.DatetimeIndex(frame.index)
        if index.tz is not None:
            index = index.tz_localize(None)
        frame.index = index
        frame.index.name = "date"

        frame = frame.sort_index().dropna(subset=["open", "high", "low", "close"]).copy()
        frame["volume"] = frame["volume"].fillna(0.0)
        if frame.empty:
            raise DataProviderError(f"yfinance returned no priced rows for {symbol} ({ticker})")
        return frame

    @staticmethod
    def _resolve_yfinance_symbol(symbol: str) -> str:
        # Share classes use a dash on Yahoo: BRK.B -> BRK-B.
        return symbol.strip().upper().replace(".", "-").replace("/", "-")
