"""Historical quote provider implementations."""

from .base import QuoteDataProvider
from .csv_data import CsvDataProvider
from .frames import quotes_from_frame
from .tradier_data import TradierHistoryProvider
from .yfinance_data import YFinanceDataProvider

__all__ = [
    "QuoteDataProvider",
    "CsvDataProvider",
    "TradierHistoryProvider",
    "YFinanceDataProvider",
    "quotes_from_frame",
]
