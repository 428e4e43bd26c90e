"""
Port (interface) for the external market analysis function.
Infrastructure adapters (e.g. LambdaMarketAnalysisClient) must implement this interface.
"""

from abc import ABC, abstractmethod

from crypto_tracker.domain.entities.sentiment import MarketAnalysis


class IMarketAnalysisProvider(ABC):
    @abstractmethod
    def get_market_analysis(self, symbol: str = "BTC") -> MarketAnalysis:
        """Return the analysis for *symbol*, or MarketAnalysis.unavailable() on failure."""
        ...
