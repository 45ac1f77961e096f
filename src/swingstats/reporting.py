"""Console and CSV presentation of window statistics."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from swingstats.analysis.percent import percent_change
from swingstats.domain.models import SwingStats, WindowResult
from swingstats.errors import UndefinedPercentChange

BANNER_TITLE = "************************ Stats *****************************"
BANNER_RULE = "************************************************************"
RESULT_COLUMNS = [
    "start_date",
    "end_date",
    "start_value",
    "end_value",
    "difference",
    "percent_change",
]


def format_stats(symbol: str, stats: SwingStats) -> str:
    """Render the stats banner for one symbol."""
    threshold = _format_number(stats.threshold_percent)
    if stats.is_empty:
        body = [
            f"{symbol} has no complete {stats.days_out} day windows in the requested range.",
        ]
    else:
        body = [
            f"{symbol} Gains more than {threshold} % in any {stats.days_out} day period "
            f"{stats.percent_up:.2f}% of the time.",
            "",
            f"{symbol} Drops more than {threshold} % in any {stats.days_out} day period "
            f"{stats.percent_down:.2f}% of the time.",
        ]
    lines = ["", BANNER_TITLE, "", *body, "", BANNER_RULE, ""]
    return "\n".join(lines)


def print_stats(symbol: str, stats: SwingStats) -> None:
    print(format_stats(symbol, stats))


def results_frame(results: Iterable[WindowResult]) -> pd.DataFrame:
    """Tabulate window results, leaving percent_change blank for zero starts."""
    rows = []
    for result in results:
        try:
            change: float | None = percent_change(result.start_value, result.end_value)
        except UndefinedPercentChange:
            change = None
        rows.append(
            {
                "start_date": result.start_date.isoformat(),
                "end_date": result.end_date.isoformat(),
                "start_value": result.start_value,
                "end_value": result.end_value,
                "difference": result.difference,
                "percent_change": change,
            }
        )
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def write_results_csv(results: Iterable[WindowResult], path: str | Path) -> Path:
    """Write per-window results to ``path`` and return it."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    results_frame(results).to_csv(output, index=False)
    return output


def _format_number(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text or "0"
