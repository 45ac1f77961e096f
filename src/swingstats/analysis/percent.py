"""Relative price change helpers."""

from __future__ import annotations

from swingstats.errors import UndefinedPercentChange


def percent_change(before: float, after: float) -> float:
    """Return the percent move from ``before`` to ``after``.

    60 is a 200% increase from 20; 50 is a 16.67% decrease from 60.
    """
    if before == 0:
        raise UndefinedPercentChange(f"percent change from zero is undefined (after={after})")
    return 100.0 * (float(after) - float(before)) / float(before)
