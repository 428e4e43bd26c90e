"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional
from unittest.mock import MagicMock

import pytest

from crypto_tracker.domain.entities.enrollment import Enrollment
from crypto_tracker.domain.entities.price import PriceQuote, PriceRecord
from crypto_tracker.domain.entities.subscriber import Subscriber
from crypto_tracker.domain.ports.enrollment_repository_port import IEnrollmentRepository
from crypto_tracker.domain.ports.price_history_repository_port import IPriceHistoryRepository
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.ports.subscriber_store_port import ISubscriberStore

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryEnrollmentRepository(IEnrollmentRepository):
    def __init__(self) -> None:
        self.items: dict[str, Enrollment] = {}

    def get(self, symbol: str) -> Optional[Enrollment]:
        return self.items.get(symbol)

    def save(self, enrollment: Enrollment) -> None:
        self.items[enrollment.symbol] = enrollment

    def list_all(self) -> list[Enrollment]:
        return list(self.items.values())


class InMemoryPriceHistoryRepository(IPriceHistoryRepository):
    def __init__(self) -> None:
        self.records: list[PriceRecord] = []

    def save(self, record: PriceRecord) -> None:
        self.records.append(record)

    def find_since(self, symbol: str, since: datetime) -> list[PriceRecord]:
        return sorted(
            (r for r in self.records if r.symbol == symbol and r.timestamp >= since),
            key=lambda r: r.timestamp,
        )


class InMemorySubscriberStore(ISubscriberStore):
    def __init__(self, subscribers: Optional[list[Subscriber]] = None) -> None:
        self.subscribers = list(subscribers or [])
        self.save_count = 0

    def load(self) -> list[Subscriber]:
        return list(self.subscribers)

    def save(self, subscribers: list[Subscriber]) -> None:
        self.subscribers = list(subscribers)
        self.save_count += 1


def make_quote(
    spot: str = "100.00",
    buy: str = "101.00",
    sell: str = "99.00",
    symbol: str = "BTC",
) -> PriceQuote:
    return PriceQuote(
        symbol=symbol,
        currency="USD",
        spot_price=Decimal(spot),
        buy_price=Decimal(buy),
        sell_price=Decimal(sell),
        timestamp=FIXED_NOW,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quote_provider() -> MagicMock:
    provider = MagicMock(spec=IPriceQuoteProvider)
    provider.get_all_prices.return_value = make_quote()
    return provider


@pytest.fixture
def enrollment_repository() -> InMemoryEnrollmentRepository:
    return InMemoryEnrollmentRepository()


@pytest.fixture
def price_history_repository() -> InMemoryPriceHistoryRepository:
    return InMemoryPriceHistoryRepository()


@pytest.fixture
def subscriber_store() -> InMemorySubscriberStore:
    return InMemorySubscriberStore()
