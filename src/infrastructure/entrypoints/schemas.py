"""
HTTP response models.

Domain entities are snake_case dataclasses; the wire format is camelCase JSON.
JSON has no NaN, so non-finite numbers (the drift sentinel) become null.
"""

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.stock_insight import (
    BulkDeal,
    NewsItem,
    StockInsight,
    StockInsightsResponse,
)


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewsItemSchema(_CamelModel):
    title: str
    source: str
    published_at: str
    url: Optional[str] = None

    @classmethod
    def from_domain(cls, item: NewsItem) -> "NewsItemSchema":
        return cls(
            title=item.title,
            source=item.source,
            published_at=item.published_at.isoformat(),
            url=item.url,
        )


class BulkDealSchema(_CamelModel):
    date: str
    buyer: str
    seller: str
    quantity: int
    price: float
    exchange: str

    @classmethod
    def from_domain(cls, deal: BulkDeal) -> "BulkDealSchema":
        return cls(
            date=deal.date,
            buyer=deal.buyer,
            seller=deal.seller,
            quantity=deal.quantity,
            price=deal.price,
            exchange=deal.exchange,
        )


class StockInsightSchema(_CamelModel):
    symbol: str
    display_symbol: str
    market: str
    current_price: Optional[float] = None
    high_52: Optional[float] = Field(default=None, alias="high52")
    low_52: Optional[float] = Field(default=None, alias="low52")
    pct_from_high: Optional[float] = None
    pct_from_low: Optional[float] = None
    latest_news: list[NewsItemSchema] = []
    bulk_deals: list[BulkDealSchema] = []
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, insight: StockInsight) -> "StockInsightSchema":
        return cls(
            symbol=insight.symbol,
            display_symbol=insight.display_symbol or insight.symbol,
            market=insight.market.value,
            current_price=_finite_or_none(insight.current_price),
            high_52=_finite_or_none(insight.high_52),
            low_52=_finite_or_none(insight.low_52),
            pct_from_high=_finite_or_none(insight.pct_from_high),
            pct_from_low=_finite_or_none(insight.pct_from_low),
            latest_news=[NewsItemSchema.from_domain(item) for item in insight.latest_news],
            bulk_deals=[BulkDealSchema.from_domain(deal) for deal in insight.bulk_deals],
            error=insight.error,
        )


class StockInsightsResponseSchema(_CamelModel):
    results: list[StockInsightSchema]

    @classmethod
    def from_domain(cls, response: StockInsightsResponse) -> "StockInsightsResponseSchema":
        return cls(results=[StockInsightSchema.from_domain(r) for r in response.results])


class SymbolsResponse(BaseModel):
    symbols: list[str]
