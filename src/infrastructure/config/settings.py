"""
Process configuration, read once at startup and injected into adapters.

Values come from environment variables, falling back to a local .env file.
Nothing below the entrypoints reads os.environ directly.
"""

from typing import Annotated, Any, Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.application.services.symbol_normalizer import DEFAULT_SUFFIX_MARKETS
from src.domain.entities.stock_insight import Market
from src.domain.errors import ConfigurationError

DEFAULT_ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"
DEFAULT_SYMBOLS_FILE = "data/nse_stock_symbols.csv"


def parse_market_suffixes(raw: str) -> dict[str, Market]:
    """Parse ``.NS=NSE,.BO=BSE`` into a suffix → Market table.

    Raises:
        ConfigurationError: on a malformed entry or an unknown market name.
    """
    table: dict[str, Market] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        suffix, sep, market = entry.partition("=")
        if not sep or not suffix.strip():
            raise ConfigurationError(f"Invalid MARKET_SUFFIXES entry: {entry!r}")
        try:
            table[suffix.strip().upper()] = Market(market.strip().upper())
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown market {market.strip()!r} in MARKET_SUFFIXES entry {entry!r}"
            ) from exc
    return table


class Settings(BaseSettings):
    """Service settings with environment variable support."""

    # Alpha Vantage
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = DEFAULT_ALPHA_VANTAGE_URL

    # Provider selection: "alphavantage" or "yfinance"
    price_provider: str = "alphavantage"
    news_provider: str = "alphavantage"
    provider_timeout_seconds: float = 10.0

    # Symbols
    symbols_file: str = DEFAULT_SYMBOLS_FILE
    market_suffixes: Annotated[dict[str, Market], NoDecode] = Field(
        default_factory=lambda: dict(DEFAULT_SUFFIX_MARKETS)
    )

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("alpha_vantage_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price_provider", "news_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("market_suffixes", mode="before")
    @classmethod
    def _parse_market_suffixes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_market_suffixes(value) if value.strip() else dict(DEFAULT_SUFFIX_MARKETS)
        return value


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Build Settings from the environment and *env_file*.

    Raises:
        ConfigurationError: if any value fails validation.
    """
    try:
        return Settings(_env_file=env_file)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from exc
