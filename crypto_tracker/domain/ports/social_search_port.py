"""
Port (interface) for social-media search.
Infrastructure adapters (e.g. TwitterSearchClient) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISocialSearch(ABC):
    @abstractmethod
    def get_post_texts(self, symbol: str) -> list[str]:
        """Return cleaned post texts mentioning *symbol*; empty on any failure."""
        ...

    @abstractmethod
    def is_available(self) -> bool: ...
