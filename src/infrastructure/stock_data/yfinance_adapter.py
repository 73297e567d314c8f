"""
Infrastructure adapter: yfinance → IPriceDataProvider, INewsProvider.
All yfinance-specific details (Ticker.history(), Ticker.news, Yahoo exchange
suffixes) are confined here; the rest of the codebase depends only on the ports.

yfinance is blocking, so every call is pushed to a worker thread with
asyncio.to_thread to keep the event loop free for sibling symbols.
"""

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

import yfinance as yf

from src.domain.entities.stock_insight import Market, NewsItem, PriceRange
from src.domain.errors import ProviderError
from src.domain.ports.news_port import INewsProvider
from src.domain.ports.price_data_port import IPriceDataProvider

logger = logging.getLogger(__name__)


def to_yahoo_symbol(symbol: str, market: Market) -> str:
    """Map a normalized symbol onto Yahoo's exchange suffixes (.NS / .BO)."""
    upper = symbol.upper()
    if upper.endswith(".BSE"):
        return upper[: -len(".BSE")] + ".BO"
    if market is Market.NSE and "." not in upper:
        return f"{upper}.NS"
    return upper


class YFinanceProvider(IPriceDataProvider, INewsProvider):
    """Fetches stock market data from Yahoo Finance via the yfinance library."""

    MAX_NEWS_ITEMS = 3

    async def fetch_price_and_range(self, symbol: str, market: Market) -> PriceRange:
        return await asyncio.to_thread(self._price_and_range, symbol, market)

    async def fetch_news_for_symbol(self, symbol: str, market: Market) -> list[NewsItem]:
        try:
            return await asyncio.to_thread(self._news, symbol, market)
        except Exception as exc:
            logger.warning("News unavailable for %s: %s", symbol, exc)
            return []

    def _price_and_range(self, symbol: str, market: Market) -> PriceRange:
        yahoo_symbol = to_yahoo_symbol(symbol, market)
        try:
            history = yf.Ticker(yahoo_symbol).history(period="1y", interval="1d")
        except Exception as exc:
            raise ProviderError(
                symbol, f"Yahoo Finance request failed for {symbol}: {exc}"
            ) from exc

        if history is None or history.empty:
            raise ProviderError(symbol, f"No historical data available for symbol: {symbol!r}")

        try:
            current_price = float(history["Close"].iloc[-1])
            high_52 = float(history["High"].max())
            low_52 = float(history["Low"].min())
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ProviderError(
                symbol, f"Unrecognized price data from Yahoo Finance for {symbol}."
            ) from exc

        if not math.isfinite(current_price):
            raise ProviderError(symbol, f"No closing price available for symbol: {symbol!r}")
        return PriceRange(current_price=current_price, high_52=high_52, low_52=low_52)

    def _news(self, symbol: str, market: Market) -> list[NewsItem]:
        raw_items = yf.Ticker(to_yahoo_symbol(symbol, market)).news or []
        items = [
            item for item in (self._to_news_item(raw) for raw in raw_items) if item is not None
        ]
        items.sort(key=lambda item: item.published_at, reverse=True)
        return items[: self.MAX_NEWS_ITEMS]

    @staticmethod
    def _to_news_item(raw: Any) -> Optional[NewsItem]:
        if not isinstance(raw, dict):
            return None

        # Current yfinance releases nest the article under "content".
        content = raw.get("content")
        if isinstance(content, dict):
            title = content.get("title")
            published_at = _parse_iso(content.get("pubDate"))
            source = (content.get("provider") or {}).get("displayName")
            url = (content.get("canonicalUrl") or {}).get("url") or (
                content.get("clickThroughUrl") or {}
            ).get("url")
        else:
            title = raw.get("title")
            published_at = _parse_epoch(raw.get("providerPublishTime"))
            source = raw.get("publisher")
            url = raw.get("link")

        if not title or published_at is None:
            return None
        return NewsItem(
            title=str(title),
            source=str(source or "Yahoo Finance"),
            published_at=published_at,
            url=url or None,
        )


def _parse_iso(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _parse_epoch(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, (int, float)):
        return None
    return datetime.fromtimestamp(raw, tz=timezone.utc)
