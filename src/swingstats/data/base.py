"""Historical quote provider contract."""

from __future__ import annotations

from datetime import date
from typing import Protocol

import pandas as pd


class QuoteDataProvider(Protocol):
    """Interface for daily bar retrieval."""

    def get_bars(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        """Return daily OHLCV bars between ``start`` and ``end`` with an ascending date index."""
