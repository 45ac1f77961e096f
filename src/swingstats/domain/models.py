"""Core quote and window statistics models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Quote:
    """One trading day's OHLCV record."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int = 0


@dataclass(frozen=True)
class WindowResult:
    """Closing prices at both ends of one forward window."""

    start_date: date
    end_date: date
    start_value: float
    end_value: float

    @property
    def difference(self) -> float:
        return self.end_value - self.start_value


@dataclass(frozen=True)
class SwingStats:
    """Share of windows that moved beyond the threshold in each direction."""

    days_out: int
    threshold_percent: float
    percent_up: float = 0.0
    percent_down: float = 0.0
    window_count: int = 0
    up_count: int = 0
    down_count: int = 0
    skipped_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no complete window was available to measure."""
        return self.window_count == 0
