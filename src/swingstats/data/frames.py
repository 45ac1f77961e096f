"""Conversion from normalized OHLCV frames to quote records."""

from __future__ import annotations

import pandas as pd

from swingstats.domain.models import Quote
from swingstats.errors import DataProviderError

OHLCV_COLUMNS = ["open", "high", "low", "close", "volume"]


def quotes_from_frame(frame: pd.DataFrame) -> list[Quote]:
    """Convert a bar frame into quotes ordered by calendar date.

    Index timestamps are truncated to their calendar date in their own
    timezone, and rows sharing a date keep the last one.
    """
    missing = [column for column in OHLCV_COLUMNS if column not in frame.columns]
    if missing:
        raise DataProviderError(f"bars missing required columns: {missing}")
    if frame.empty:
        return []

    # Order by full timestamp first so "last" means the latest bar of each day.
    normalized = frame[OHLCV_COLUMNS].sort_index(kind="stable")
    normalized.index = pd.Index([pd.Timestamp(value).date() for value in normalized.index])
    normalized = normalized[~normalized.index.duplicated(keep="last")].copy()
    normalized["volume"] = normalized["volume"].fillna(0)

    return [
        Quote(
            date=row.Index,
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(row.volume),
        )
        for row in normalized.itertuples()
    ]
