from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

import pytest

from swingstats.domain.models import Quote

QuoteFactory = Callable[[date, float], Quote]


def _quote(day: date, close: float) -> Quote:
    return Quote(date=day, open=close, high=close, low=close, close=close, volume=1000)


@pytest.fixture
def make_quote() -> QuoteFactory:
    return _quote


@pytest.fixture
def daily_quotes() -> list[Quote]:
    """One quote per calendar day from 2020-01-01 through 2020-02-01."""
    start = date(2020, 1, 1)
    return [_quote(start + timedelta(days=offset), 100.0 + offset) for offset in range(32)]
