"""Window statistics over daily quotes."""

from .percent import percent_change
from .stats import aggregate, build_results, ensure_ascending, summarize, window_stats
from .window import find_window_end, window_end_index

__all__ = [
    "aggregate",
    "build_results",
    "ensure_ascending",
    "find_window_end",
    "percent_change",
    "summarize",
    "window_stats",
    "window_end_index",
]
