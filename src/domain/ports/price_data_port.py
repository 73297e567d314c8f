"""
Port (interface) for price / 52-week range providers.
Infrastructure adapters (e.g. AlphaVantageClient, YFinanceProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_insight import Market, PriceRange


class IPriceDataProvider(ABC):
    @abstractmethod
    async def fetch_price_and_range(self, symbol: str, market: Market) -> PriceRange:
        """Return the latest close and the trailing 52-week high/low for *symbol*.

        Raises:
            ProviderError: on network failure, non-2xx response, unrecognized
                           payload or unknown symbol.
            ConfigurationError: if the provider credential is missing.
        """
        ...
