"""Forward window lookup over date-ordered quotes."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from datetime import date, timedelta

from swingstats.domain.models import Quote
from swingstats.errors import WindowNotFound


def window_end_index(quotes: Sequence[Quote], start_index: int, days_out: int) -> int:
    """Return the index of the last quote dated on or before start date + ``days_out``.

    The search only succeeds when a later quote proves the window is complete:
    if every remaining quote is inside the window, ``WindowNotFound`` is raised.
    When the next quote already falls outside the window, the start index itself
    is returned and the window has zero length.
    """
    if days_out < 1:
        raise ValueError("days_out must be positive")
    if start_index < 0 or start_index >= len(quotes):
        raise IndexError(f"start_index {start_index} outside {len(quotes)} quotes")

    target_date = quotes[start_index].date + timedelta(days=days_out)
    first_after = bisect_right(quotes, target_date, lo=start_index, key=_quote_date)
    if first_after >= len(quotes):
        raise WindowNotFound(
            f"window from {quotes[start_index].date} to {target_date} runs past the last quote"
        )
    return first_after - 1


def find_window_end(quotes: Sequence[Quote], start_index: int, days_out: int) -> Quote:
    """Return the quote that closes the forward window starting at ``start_index``."""
    return quotes[window_end_index(quotes, start_index, days_out)]


def _quote_date(quote: Quote) -> date:
    return quote.date
