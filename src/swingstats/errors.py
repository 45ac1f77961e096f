"""Custom exceptions for clearer error handling across swingstats."""


class SwingStatsError(Exception):
    """Base exception for all swingstats errors."""


class ConfigError(SwingStatsError, ValueError):
    """Raised when settings or command-line values are invalid or missing."""


class DataProviderError(SwingStatsError):
    """Raised when historical quote retrieval fails."""


class WindowNotFound(SwingStatsError, LookupError):
    """Raised when a forward window runs past the end of the available quotes."""


class UndefinedPercentChange(SwingStatsError, ZeroDivisionError):
    """Raised when a percent change is requested from a zero starting value."""
