"""
Port (interface) for batch sentiment detection.
Infrastructure adapters (e.g. ComprehendSentimentAnalyzer) must implement this interface.
"""

from abc import ABC, abstractmethod

from crypto_tracker.domain.entities.sentiment import TextSentiment


class ISentimentAnalyzer(ABC):
    @abstractmethod
    def detect_sentiment(self, texts: list[str]) -> list[TextSentiment]:
        """Detect sentiment for each text.

        TextSentiment.index refers to the position in *texts*. Texts that could
        not be analyzed are simply absent from the result.
        """
        ...
