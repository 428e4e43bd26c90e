"""
Port (interface) for exchange quote providers.
Infrastructure adapters (e.g. CoinbasePriceQuoteProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from crypto_tracker.domain.entities.price import CoinInfo, PriceQuote


class IPriceQuoteProvider(ABC):
    @abstractmethod
    def get_spot_price(self, symbol: str) -> Decimal: ...

    @abstractmethod
    def get_buy_price(self, symbol: str) -> Decimal: ...

    @abstractmethod
    def get_sell_price(self, symbol: str) -> Decimal: ...

    @abstractmethod
    def get_all_prices(self, symbol: str) -> PriceQuote:
        """Return spot, buy and sell prices for *symbol* in one quote.

        Raises:
            ExchangeApiError: when any of the three prices cannot be fetched.
        """
        ...

    @abstractmethod
    def get_popular_coins(self, limit: int = 100) -> list[CoinInfo]: ...
