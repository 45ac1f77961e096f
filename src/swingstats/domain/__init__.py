"""Domain models."""

from .models import Quote, SwingStats, WindowResult

__all__ = ["Quote", "SwingStats", "WindowResult"]
