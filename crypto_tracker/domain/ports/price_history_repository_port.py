"""
Port (interface) for persisted price samples.
Infrastructure adapters (e.g. DynamoDBPriceHistoryRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from crypto_tracker.domain.entities.price import PriceRecord


class IPriceHistoryRepository(ABC):
    @abstractmethod
    def save(self, record: PriceRecord) -> None: ...

    @abstractmethod
    def find_since(self, symbol: str, since: datetime) -> list[PriceRecord]:
        """Return records of *symbol* with timestamp >= *since*, oldest first."""
        ...
