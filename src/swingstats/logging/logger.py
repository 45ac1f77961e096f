"""Concise human-readable run logger."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from swingstats.domain.models import SwingStats


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO") -> None:
        self._logger = logging.getLogger("swingstats")
        self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def fetch_started(self, source: str, symbol: str, start: date, end: date) -> None:
        self._logger.info(
            "fetch | %s | %s | %s -> %s", source, symbol, start.isoformat(), end.isoformat()
        )

    def quotes_loaded(
        self,
        symbol: str,
        count: int,
        first: date | None = None,
        last: date | None = None,
    ) -> None:
        parts = [f"quotes | {symbol} | count {count}"]
        if first is not None and last is not None:
            parts.append(f"range {first.isoformat()} -> {last.isoformat()}")
        self._logger.info(" | ".join(parts))

    def windows_summary(self, symbol: str, stats: SwingStats) -> None:
        parts = [
            f"windows | {symbol} | days {stats.days_out}",
            f"measured {stats.window_count}",
            f"up {stats.up_count}",
            f"down {stats.down_count}",
        ]
        if stats.skipped_count:
            parts.append(f"skipped_zero_close {stats.skipped_count}")
        self._logger.info(" | ".join(parts))

    def results_written(self, path: str | Path, rows: int) -> None:
        self._logger.info("results | %s rows | %s", rows, path)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)
