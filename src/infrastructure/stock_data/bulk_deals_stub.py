"""
Infrastructure adapter: placeholder bulk / block deal source → IBulkDealProvider.

No deals vendor is wired up yet. A real adapter would query the exchange's
deal reports and map rows into BulkDeal; until then every lookup is empty.
"""

from src.domain.entities.stock_insight import BulkDeal
from src.domain.ports.bulk_deal_port import IBulkDealProvider


class NullBulkDealProvider(IBulkDealProvider):
    async def fetch_bulk_deals_for_symbol(self, symbol: str) -> list[BulkDeal]:
        return []
