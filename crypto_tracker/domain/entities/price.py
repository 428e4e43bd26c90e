"""
Domain entities for exchange quotes and price history.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PriceQuote:
    symbol: str
    currency: str
    spot_price: Optional[Decimal] = None
    buy_price: Optional[Decimal] = None
    sell_price: Optional[Decimal] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class PricePoint:
    spot_price: Optional[Decimal]
    buy_price: Optional[Decimal]
    sell_price: Optional[Decimal]
    timestamp: datetime


@dataclass(frozen=True)
class PriceHistory:
    """Snapshot of the in-memory history kept for a tracked symbol."""

    symbol: str
    currency: str
    history: list[PricePoint]
    total_records: int


@dataclass(frozen=True)
class PriceRecord:
    """A persisted price sample; ttl is the epoch second it expires at."""

    symbol: str
    timestamp: datetime
    spot_price: Optional[Decimal]
    buy_price: Optional[Decimal]
    sell_price: Optional[Decimal]
    daily_change_percent: Optional[Decimal] = None
    ttl: Optional[int] = None


@dataclass(frozen=True)
class PriceChange:
    current_price: Optional[Decimal]
    daily_change_percent: Optional[Decimal]
    avg_change_percent: Optional[Decimal]
    days_of_data: int


@dataclass(frozen=True)
class TrendData:
    current_price: Optional[Decimal]
    seven_day_moving_average: Optional[Decimal]
    trending_upwards: bool
    percent_above_average: float


@dataclass(frozen=True)
class TrackingStatus:
    tracked_symbols: list[str]
    total_tracked: int
    timestamp: datetime


@dataclass(frozen=True)
class CoinInfo:
    symbol: str
    name: str
    display_name: str = field(default="")
