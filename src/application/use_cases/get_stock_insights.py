"""
Use-case: build insights for a batch of raw symbols.
Depends only on Domain ports and entities; no infrastructure imports.
"""

import asyncio
import logging
from collections.abc import Mapping

from src.application.services.symbol_normalizer import (
    DEFAULT_SUFFIX_MARKETS,
    RawSymbols,
    classify_market,
    normalize_symbols,
    strip_exchange_suffix,
)
from src.application.use_cases.build_stock_insight import BuildStockInsightUseCase
from src.domain.entities.stock_insight import Market, StockInsightsResponse

logger = logging.getLogger(__name__)


class GetStockInsightsUseCase:
    def __init__(
        self,
        build_insight: BuildStockInsightUseCase,
        suffix_markets: Mapping[str, Market] = DEFAULT_SUFFIX_MARKETS,
        domestic_symbols: frozenset[str] = frozenset(),
    ) -> None:
        """
        Args:
            build_insight:    Per-symbol aggregator.
            suffix_markets:   Exchange suffix → Market table used for classification.
            domestic_symbols: Bare symbols known to trade on the domestic exchange.
        """
        self._build_insight = build_insight
        self._suffix_markets = suffix_markets
        self._domestic_symbols = domestic_symbols

    async def execute(self, raw_symbols: RawSymbols) -> StockInsightsResponse:
        """Normalize *raw_symbols* and build one insight per unique symbol.

        Symbols are processed concurrently; results keep first-seen order.

        Raises:
            ValidationError: if no symbol survives normalization. Raised before
                             any provider is called.
        """
        symbols = normalize_symbols(raw_symbols)
        logger.info("Building insights for %d symbol(s): %s", len(symbols), ", ".join(symbols))

        insights = await asyncio.gather(
            *(
                self._build_insight.execute(
                    symbol,
                    classify_market(symbol, self._suffix_markets, self._domestic_symbols),
                    strip_exchange_suffix(symbol, self._suffix_markets),
                )
                for symbol in symbols
            )
        )
        return StockInsightsResponse(results=list(insights))
