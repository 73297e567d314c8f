"""
Domain entities for per-symbol stock insights.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Market(str, Enum):
    NSE = "NSE"
    BSE = "BSE"
    US = "US"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class NewsItem:
    title: str
    source: str
    published_at: datetime
    url: Optional[str] = None


@dataclass(frozen=True)
class BulkDeal:
    date: str
    buyer: str
    seller: str
    quantity: int
    price: float
    exchange: str


@dataclass(frozen=True)
class PriceRange:
    current_price: float
    high_52: float
    low_52: float


@dataclass(frozen=True)
class StockInsight:
    """Merged result for one normalized symbol.

    display_symbol is the symbol without its exchange suffix.
    When *error* is set the numeric fields are None; latest_news and
    bulk_deals still carry whatever their own fetches returned.
    pct_from_high / pct_from_low are float('nan') when undefined.
    """

    symbol: str
    market: Market
    current_price: Optional[float] = None
    high_52: Optional[float] = None
    low_52: Optional[float] = None
    pct_from_high: Optional[float] = None
    pct_from_low: Optional[float] = None
    latest_news: list[NewsItem] = field(default_factory=list)
    bulk_deals: list[BulkDeal] = field(default_factory=list)
    error: Optional[str] = None
    display_symbol: Optional[str] = None


@dataclass(frozen=True)
class StockInsightsResponse:
    results: list[StockInsight]
