"""
Infrastructure adapter: Alpha Vantage REST API → IPriceDataProvider, INewsProvider.

All Alpha Vantage specifics (query functions, payload keys, error envelopes,
timestamp formats) are confined here. The API key is injected at construction;
a missing key surfaces as ConfigurationError on the first call.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import httpx

from src.domain.entities.stock_insight import Market, NewsItem, PriceRange
from src.domain.errors import ConfigurationError, ProviderError
from src.domain.ports.news_port import INewsProvider
from src.domain.ports.price_data_port import IPriceDataProvider
from src.infrastructure.config.settings import DEFAULT_ALPHA_VANTAGE_URL

logger = logging.getLogger(__name__)

_SERIES_KEY = "Time Series (Daily)"
_ERROR_KEYS = ("Error Message", "Note", "Information")
_NEWS_TIME_FORMATS = ("%Y%m%dT%H%M%S", "%Y%m%dT%H%M")
_INDIAN_SUFFIXES = (".NS", ".BO", ".BSE")


def to_alpha_vantage_symbol(symbol: str, market: Market) -> str:
    """Map a normalized symbol onto Alpha Vantage's listing.

    Alpha Vantage carries Indian equities only under their BSE listing
    (``RELIANCE.BSE``), so NSE and BSE symbols are both rewritten to ``.BSE``.
    """
    upper = symbol.upper()
    if market not in (Market.NSE, Market.BSE):
        return upper
    for suffix in _INDIAN_SUFFIXES:
        if upper.endswith(suffix):
            upper = upper[: -len(suffix)]
            break
    return f"{upper}.BSE"


class AlphaVantageClient(IPriceDataProvider, INewsProvider):
    """Fetches daily candles and news sentiment from Alpha Vantage."""

    LOOKBACK_DAYS = 365
    NEWS_LIMIT = 50
    MAX_NEWS_ITEMS = 3

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_ALPHA_VANTAGE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            api_key:  Alpha Vantage API key. May be None; calls then raise
                      ConfigurationError.
            base_url: Query endpoint, overridable for proxies and tests.
            timeout:  Per-request timeout in seconds.
            client:   Optional shared AsyncClient. When omitted a short-lived
                      client is opened per request.
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    # ------------------------------------------------------------------
    # IPriceDataProvider interface
    # ------------------------------------------------------------------

    async def fetch_price_and_range(self, symbol: str, market: Market) -> PriceRange:
        payload = await self._query(
            symbol,
            {
                "function": "TIME_SERIES_DAILY",
                "symbol": to_alpha_vantage_symbol(symbol, market),
                "outputsize": "full",
            },
        )
        series = payload.get(_SERIES_KEY)
        if not isinstance(series, dict):
            raise ProviderError(
                symbol, f"Unrecognized price payload from Alpha Vantage for {symbol}."
            )
        if not series:
            raise ProviderError(symbol, f"No price history available for {symbol}.")
        return self._summarize_series(symbol, series)

    # ------------------------------------------------------------------
    # INewsProvider interface
    # ------------------------------------------------------------------

    async def fetch_news_for_symbol(self, symbol: str, market: Market) -> list[NewsItem]:
        try:
            payload = await self._query(
                symbol,
                {
                    "function": "NEWS_SENTIMENT",
                    "tickers": to_alpha_vantage_symbol(symbol, market),
                    "limit": str(self.NEWS_LIMIT),
                },
            )
        except (ProviderError, ConfigurationError) as exc:
            logger.warning("News unavailable for %s: %s", symbol, exc)
            return []

        items = [
            item
            for item in (self._to_news_item(entry) for entry in payload.get("feed") or [])
            if item is not None
        ]
        items.sort(key=lambda item: item.published_at, reverse=True)
        return items[: self.MAX_NEWS_ITEMS]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _query(self, symbol: str, params: dict[str, str]) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError(
                "ALPHA_VANTAGE_API_KEY is not set; configure it in the environment or .env file."
            )
        params = {**params, "apikey": self._api_key}

        try:
            if self._client is not None:
                response = await self._client.get(self._base_url, params=params, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            raise ProviderError(symbol, f"Alpha Vantage timed out for {symbol}.") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                symbol,
                f"Alpha Vantage returned HTTP {exc.response.status_code} for {symbol}.",
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(symbol, f"Alpha Vantage request failed for {symbol}: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(symbol, f"Alpha Vantage returned invalid JSON for {symbol}.") from exc

        if not isinstance(payload, dict):
            raise ProviderError(symbol, f"Unrecognized payload from Alpha Vantage for {symbol}.")
        for key in _ERROR_KEYS:
            if key in payload:
                raise ProviderError(symbol, f"Alpha Vantage error for {symbol}: {payload[key]}")
        return payload

    def _summarize_series(self, symbol: str, series: dict[str, dict]) -> PriceRange:
        try:
            candles = sorted(
                (
                    (
                        date.fromisoformat(day),
                        float(bar["2. high"]),
                        float(bar["3. low"]),
                        float(bar["4. close"]),
                    )
                    for day, bar in series.items()
                ),
                key=lambda candle: candle[0],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError(
                symbol, f"Malformed candle in Alpha Vantage series for {symbol}."
            ) from exc

        latest_day = candles[-1][0]
        cutoff = latest_day - timedelta(days=self.LOOKBACK_DAYS)
        window = [candle for candle in candles if candle[0] >= cutoff]
        return PriceRange(
            current_price=window[-1][3],
            high_52=max(candle[1] for candle in window),
            low_52=min(candle[2] for candle in window),
        )

    @staticmethod
    def _to_news_item(entry: Any) -> Optional[NewsItem]:
        if not isinstance(entry, dict) or not entry.get("title"):
            return None
        published_at = _parse_news_time(entry.get("time_published"))
        if published_at is None:
            return None
        return NewsItem(
            title=str(entry["title"]),
            source=str(entry.get("source") or "Unknown"),
            published_at=published_at,
            url=entry.get("url") or None,
        )


def _parse_news_time(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    for fmt in _NEWS_TIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None
