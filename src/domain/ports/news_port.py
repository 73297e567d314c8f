"""
Port (interface) for news headline providers.
Infrastructure adapters (e.g. AlphaVantageClient, YFinanceProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_insight import Market, NewsItem


class INewsProvider(ABC):
    @abstractmethod
    async def fetch_news_for_symbol(self, symbol: str, market: Market) -> list[NewsItem]:
        """Return recent headlines for *symbol*, newest first.

        Implementations swallow their own failures and return an empty list.
        """
        ...
