"""
Provider wiring: Infrastructure entrypoint / Composition Root helpers.

Maps the provider names in Settings onto adapter instances and binds them to
the application use-cases. Shared by the FastAPI app and the CLI so both run
the same pipeline.
"""

import logging
from typing import Optional

from src.application.use_cases.build_stock_insight import BuildStockInsightUseCase
from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.domain.errors import ConfigurationError
from src.domain.ports.bulk_deal_port import IBulkDealProvider
from src.domain.ports.symbol_catalog_port import ISymbolCatalog
from src.infrastructure.config.settings import Settings
from src.infrastructure.stock_data.alpha_vantage_adapter import AlphaVantageClient
from src.infrastructure.stock_data.bulk_deals_stub import NullBulkDealProvider
from src.infrastructure.stock_data.yfinance_adapter import YFinanceProvider

logger = logging.getLogger(__name__)

PROVIDER_NAMES = ("alphavantage", "yfinance")


def _build_provider(name: str, settings: Settings, cache: dict):
    if name not in PROVIDER_NAMES:
        raise ConfigurationError(
            f"Unknown provider {name!r}; expected one of: {', '.join(PROVIDER_NAMES)}"
        )
    if name not in cache:
        if name == "alphavantage":
            cache[name] = AlphaVantageClient(
                api_key=settings.alpha_vantage_api_key,
                base_url=settings.alpha_vantage_base_url,
                timeout=settings.provider_timeout_seconds,
            )
        else:
            cache[name] = YFinanceProvider()
    return cache[name]


def load_domestic_symbols(catalog: ISymbolCatalog) -> frozenset[str]:
    """Best-effort load of bare domestic symbols used for market classification."""
    try:
        return frozenset(catalog.list_symbols())
    except OSError as exc:
        logger.warning("Symbol catalog unavailable, market hints fall back to suffixes: %s", exc)
        return frozenset()


def create_insights_use_case(
    settings: Settings,
    catalog: Optional[ISymbolCatalog] = None,
    bulk_deal_provider: Optional[IBulkDealProvider] = None,
) -> GetStockInsightsUseCase:
    """Build the batch use-case with adapters chosen by *settings*.

    Args:
        settings:           Loaded process configuration.
        catalog:            Symbol catalog used to seed domestic-market hints (optional).
        bulk_deal_provider: Deals source; defaults to NullBulkDealProvider.

    Raises:
        ConfigurationError: if a provider name in *settings* is unknown.
    """
    uses_alpha_vantage = "alphavantage" in (settings.price_provider, settings.news_provider)
    if uses_alpha_vantage and not settings.alpha_vantage_api_key:
        logger.warning("ALPHA_VANTAGE_API_KEY is not set; Alpha Vantage calls will fail.")

    cache: dict = {}
    build_insight = BuildStockInsightUseCase(
        price_provider=_build_provider(settings.price_provider, settings, cache),
        news_provider=_build_provider(settings.news_provider, settings, cache),
        bulk_deal_provider=bulk_deal_provider or NullBulkDealProvider(),
        timeout_seconds=settings.provider_timeout_seconds,
    )
    return GetStockInsightsUseCase(
        build_insight,
        suffix_markets=settings.market_suffixes,
        domestic_symbols=load_domestic_symbols(catalog) if catalog is not None else frozenset(),
    )
