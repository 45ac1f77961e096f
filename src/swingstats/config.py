"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Self

from dotenv import load_dotenv

from swingstats.errors import ConfigError

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_START = date(1980, 1, 1)
DATA_SOURCES = ("tradier", "csv", "yfinance")


def parse_date(value: str | date | None, *, field_name: str, default: date) -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if value is None:
        return default
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return default
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a YYYY-MM-DD date, got {text!r}") from exc


def parse_int(value: str | None, *, field_name: str, default: int) -> int:
    """Parse integer values from env strings."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer, got {value!r}") from exc


def parse_float(value: str | None, *, field_name: str, default: float) -> float:
    """Parse float values from env strings."""
    if value is None or not value.strip():
        return default
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a number, got {value!r}") from exc


def parse_optional_str(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    return text or None


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    symbol: str = ""
    start: date = DEFAULT_START
    end: date = field(default_factory=date.today)
    days_out: int = 30
    percent_away: float = 4.5
    data_source: str = "tradier"
    tradier_api_key: str = ""
    tradier_base_url: str = "https://api.tradier.com/v1"
    historical_data_dir: str = "historical_data"
    results_csv: str | None = None
    request_timeout: int = 20
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        today = date.today()
        raw = cls(
            symbol=str(os.getenv("SYMBOL", "")).strip().upper(),
            start=parse_date(os.getenv("START_DATE"), field_name="start", default=DEFAULT_START),
            end=parse_date(os.getenv("END_DATE"), field_name="end", default=today),
            days_out=parse_int(os.getenv("DAYS_OUT"), field_name="days_out", default=30),
            percent_away=parse_float(
                os.getenv("PERCENT_AWAY"),
                field_name="percent_away",
                default=4.5,
            ),
            data_source=str(os.getenv("DATA_SOURCE", "tradier")).strip().lower(),
            tradier_api_key=str(os.getenv("TRADIER_API_KEY", "")).strip(),
            tradier_base_url=str(
                os.getenv("TRADIER_BASE_URL", "https://api.tradier.com/v1")
            ).strip(),
            historical_data_dir=str(os.getenv("HISTORICAL_DATA_DIR", "historical_data")).strip(),
            results_csv=parse_optional_str(os.getenv("RESULTS_CSV")),
            request_timeout=parse_int(
                os.getenv("REQUEST_TIMEOUT"),
                field_name="request_timeout",
                default=20,
            ),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        overrides = dict(kwargs)
        symbol = overrides.get("symbol")
        if isinstance(symbol, str):
            overrides["symbol"] = symbol.strip().upper()
        for name in ("start", "end"):
            value = overrides.get(name)
            if isinstance(value, str):
                overrides[name] = parse_date(value, field_name=name, default=getattr(self, name))
        data_source = overrides.get("data_source")
        if isinstance(data_source, str):
            overrides["data_source"] = data_source.strip().lower()
        updated = replace(self, **overrides)
        return updated.validate()

    def validate(self) -> Self:
        """Validate settings fields."""
        if self.days_out <= 0:
            raise ConfigError("days_out must be positive")
        if self.percent_away < 0:
            raise ConfigError("percent_away must be non-negative")
        if self.start > self.end:
            raise ConfigError("start must not be after end")
        if self.data_source not in DATA_SOURCES:
            raise ConfigError(f"data_source must be one of {', '.join(DATA_SOURCES)}")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        return self

    def require_runnable(self) -> Self:
        """Check the fields that only matter once a fetch is about to happen."""
        if not self.symbol:
            raise ConfigError("symbol is required (--symbol or SYMBOL)")
        if self.data_source == "tradier" and not self.tradier_api_key:
            raise ConfigError("Tradier API key is required (--key or TRADIER_API_KEY)")
        return self
