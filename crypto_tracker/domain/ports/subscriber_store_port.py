"""
Port (interface) for the subscriber list store.
Infrastructure adapters (e.g. S3SubscriberStore) must implement this interface.
"""

from abc import ABC, abstractmethod

from crypto_tracker.domain.entities.subscriber import Subscriber


class ISubscriberStore(ABC):
    @abstractmethod
    def load(self) -> list[Subscriber]:
        """Return every subscriber; an absent or unreadable store reads as empty."""
        ...

    @abstractmethod
    def save(self, subscribers: list[Subscriber]) -> None:
        """Replace the stored list.

        Raises:
            SubscriptionStoreError: when the write fails.
        """
        ...
