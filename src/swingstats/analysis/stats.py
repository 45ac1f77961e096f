"""Threshold-crossing aggregation across all forward windows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from swingstats.analysis.percent import percent_change
from swingstats.analysis.window import find_window_end
from swingstats.domain.models import Quote, SwingStats, WindowResult
from swingstats.errors import UndefinedPercentChange, WindowNotFound


def build_results(quotes: Sequence[Quote], days_out: int) -> list[WindowResult]:
    """Build one window result per start day whose window is complete."""
    if days_out < 1:
        raise ValueError("days_out must be positive")
    results: list[WindowResult] = []
    for index, quote in enumerate(quotes):
        try:
            end = find_window_end(quotes, index, days_out)
        except WindowNotFound:
            continue
        results.append(
            WindowResult(
                start_date=quote.date,
                end_date=end.date,
                start_value=quote.close,
                end_value=end.close,
            )
        )
    return results


def summarize(
    results: Iterable[WindowResult],
    threshold_percent: float,
    days_out: int,
) -> SwingStats:
    """Count windows moving beyond +/- ``threshold_percent``.

    Windows starting from a zero close have no percent change and are reported
    in ``skipped_count`` rather than the denominator. With no measurable window
    both percentages are 0.0 and ``is_empty`` is true.
    """
    if threshold_percent < 0:
        raise ValueError("threshold_percent must be non-negative")

    window_count = 0
    up_count = 0
    down_count = 0
    skipped_count = 0
    for result in results:
        try:
            change = percent_change(result.start_value, result.end_value)
        except UndefinedPercentChange:
            skipped_count += 1
            continue
        window_count += 1
        if change > threshold_percent:
            up_count += 1
        elif change < -threshold_percent:
            down_count += 1

    if window_count == 0:
        return SwingStats(
            days_out=days_out,
            threshold_percent=threshold_percent,
            skipped_count=skipped_count,
        )
    return SwingStats(
        days_out=days_out,
        threshold_percent=threshold_percent,
        percent_up=100.0 * up_count / window_count,
        percent_down=100.0 * down_count / window_count,
        window_count=window_count,
        up_count=up_count,
        down_count=down_count,
        skipped_count=skipped_count,
    )


def window_stats(
    quotes: Sequence[Quote],
    days_out: int,
    threshold_percent: float,
) -> tuple[list[WindowResult], SwingStats]:
    """Return every complete window together with its summary."""
    ensure_ascending(quotes)
    results = build_results(quotes, days_out)
    return results, summarize(results, threshold_percent, days_out)


def aggregate(quotes: Sequence[Quote], days_out: int, threshold_percent: float) -> SwingStats:
    """Compute up/down threshold-crossing percentages for ``quotes``."""
    _, stats = window_stats(quotes, days_out, threshold_percent)
    return stats


def ensure_ascending(quotes: Sequence[Quote]) -> None:
    """Reject quote sequences that are not strictly ascending by date."""
    for previous, current in zip(quotes, quotes[1:]):
        if current.date <= previous.date:
            raise ValueError(
                f"quotes must be strictly ascending by date: {current.date} follows {previous.date}"
            )
