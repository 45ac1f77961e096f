"""Tradier market history provider."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import pandas as pd
import requests

from swingstats.errors import DataProviderError


class TradierHistoryProvider:
    """Fetch daily OHLCV bars from Tradier's ``/markets/history`` endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.tradier.com/v1",
        timeout: int = 20,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
            }
        )
        self.logger = logging.getLogger("swingstats.data.tradier")

    def get_bars(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        normalized_symbol = symbol.strip().upper()
        payload = self._request(
            path="/markets/history",
            params={
                "symbol": normalized_symbol,
                "start": start.isoformat(),
                "end": end.isoformat(),
                "interval": "daily",
            },
        )
        days = self._extract_days(payload)
        if not days:
            raise DataProviderError("No data returned from the Tradier API.")
        return self._days_to_frame(normalized_symbol, days)

    def _request(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        self.logger.debug("GET %s %s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DataProviderError(f"Tradier request failed: {exc}") from exc
        if response.status_code != 200:
            detail = response.text.strip() or "No response body"
            raise DataProviderError(
                f"Tradier API did not return 200 for {path}; "
                f"it returned {response.status_code}: {detail}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise DataProviderError(f"Tradier returned invalid JSON for {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise DataProviderError(f"Tradier returned an unexpected payload for {path}")
        return payload

    @staticmethod
    def _extract_days(payload: dict[str, Any]) -> list[dict[str, Any]]:
        # "history" is null when the range has no trading days, and "day" is a
        # single object rather than a list when exactly one day matches.
        history = payload.get("history")
        if not isinstance(history, dict):
            return []
        days = history.get("day")
        if isinstance(days, dict):
            return [days]
        if isinstance(days, list):
            return [day for day in days if isinstance(day, dict)]
        return []

    @staticmethod
    def _days_to_frame(symbol: str, days: list[dict[str, Any]]) -> pd.DataFrame:
        frame = pd.DataFrame(days)
        required = {"date", "open", "high", "low", "close", "volume"}
        if not required.issubset(frame.columns):
            missing = sorted(required.difference(frame.columns))
            raise DataProviderError(f"{symbol}: history payload missing fields {missing}")
        try:
            frame.index = pd.to_datetime(frame["date"], format="%Y-%m-%d")
        except ValueError as exc:
            raise DataProviderError(f"{symbol}: history payload has malformed dates") from exc
        frame.index.name = "date"
        frame = frame.sort_index()
        frame = frame[["open", "high", "low", "close", "volume"]]
        frame = frame.apply(pd.to_numeric, errors="coerce")
        frame = frame.dropna(subset=["open", "high", "low", "close"]).copy()
        frame["volume"] = frame["volume"].fillna(0.0)
        return frame
