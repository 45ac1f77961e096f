"""Historical threshold-crossing statistics for daily price quotes."""

from swingstats.analysis import aggregate, find_window_end, percent_change
from swingstats.domain import Quote, SwingStats, WindowResult

__all__ = [
    "Quote",
    "SwingStats",
    "WindowResult",
    "aggregate",
    "find_window_end",
    "percent_change",
]

__version__ = "0.1.0"
