"""
Port (interface) for bulk / block deal sources.
Infrastructure adapters (e.g. NullBulkDealProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_insight import BulkDeal


class IBulkDealProvider(ABC):
    @abstractmethod
    async def fetch_bulk_deals_for_symbol(self, symbol: str) -> list[BulkDeal]: ...
