"""
Use-case: build the StockInsight for one normalized symbol.
Depends only on Domain ports and entities; no infrastructure imports.

Price/range, news and bulk-deal fetches run concurrently. A price failure is a
symbol-level failure (error set, numerics None); news and deal failures
degrade to empty lists and never surface as an error.
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from src.application.services.log_context import current_symbol
from src.application.services.price_drift import pct_from_high, pct_from_low
from src.domain.entities.stock_insight import (
    BulkDeal,
    Market,
    NewsItem,
    PriceRange,
    StockInsight,
)
from src.domain.errors import ConfigurationError, ProviderError
from src.domain.ports.bulk_deal_port import IBulkDealProvider
from src.domain.ports.news_port import INewsProvider
from src.domain.ports.price_data_port import IPriceDataProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BuildStockInsightUseCase:
    MAX_NEWS_ITEMS: int = 3
    DEFAULT_TIMEOUT_SECONDS: float = 10.0

    def __init__(
        self,
        price_provider: IPriceDataProvider,
        news_provider: INewsProvider,
        bulk_deal_provider: IBulkDealProvider,
        timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Args:
            timeout_seconds: Upper bound for each individual provider call.
                             None disables the bound.
        """
        self._price_provider = price_provider
        self._news_provider = news_provider
        self._bulk_deal_provider = bulk_deal_provider
        self._timeout = timeout_seconds

    async def execute(
        self, symbol: str, market: Market, display_symbol: Optional[str] = None
    ) -> StockInsight:
        current_symbol.set(symbol)
        display_symbol = display_symbol or symbol
        price_result, news, deals = await asyncio.gather(
            self._fetch_price(symbol, market),
            self._fetch_news(symbol, market),
            self._fetch_bulk_deals(symbol),
        )

        if isinstance(price_result, str):
            return StockInsight(
                symbol=symbol,
                market=market,
                display_symbol=display_symbol,
                latest_news=news,
                bulk_deals=deals,
                error=price_result,
            )

        return StockInsight(
            symbol=symbol,
            market=market,
            display_symbol=display_symbol,
            current_price=price_result.current_price,
            high_52=price_result.high_52,
            low_52=price_result.low_52,
            pct_from_high=pct_from_high(price_result.current_price, price_result.high_52),
            pct_from_low=pct_from_low(price_result.current_price, price_result.low_52),
            latest_news=news,
            bulk_deals=deals,
        )

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self._timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._timeout)

    async def _fetch_price(self, symbol: str, market: Market) -> PriceRange | str:
        """Return the PriceRange, or the failure message to attach to the insight."""
        try:
            return await self._bounded(
                self._price_provider.fetch_price_and_range(symbol, market)
            )
        except asyncio.TimeoutError:
            message = f"Timed out after {self._timeout:g}s fetching price data for {symbol}."
        except (ProviderError, ConfigurationError) as exc:
            message = str(exc)
        logger.warning("Price fetch failed: %s", message)
        return message

    async def _fetch_news(self, symbol: str, market: Market) -> list[NewsItem]:
        try:
            items = await self._bounded(
                self._news_provider.fetch_news_for_symbol(symbol, market)
            )
            ordered = sorted(items, key=lambda item: item.published_at, reverse=True)
        except Exception as exc:
            logger.warning("News fetch failed, continuing without headlines: %s", exc)
            return []
        return ordered[: self.MAX_NEWS_ITEMS]

    async def _fetch_bulk_deals(self, symbol: str) -> list[BulkDeal]:
        try:
            return list(
                await self._bounded(
                    self._bulk_deal_provider.fetch_bulk_deals_for_symbol(symbol)
                )
            )
        except Exception as exc:
            logger.warning("Bulk-deal fetch failed, continuing without deals: %s", exc)
            return []
