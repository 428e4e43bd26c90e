"""
Use-case: fetch a single quote (spot, buy or sell) for a symbol.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.price import PriceQuote
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.symbols import normalize_symbol, split_symbol

PRICE_TYPES = ("spot", "buy", "sell")


class GetPriceUseCase:
    def __init__(self, provider: IPriceQuoteProvider, clock: Clock = utc_now) -> None:
        self._provider = provider
        self._clock = clock

    def execute(self, symbol: str, price_type: str) -> PriceQuote:
        """Fetch the *price_type* price for *symbol* ("btc" means BTC-USD).

        Only the requested price is set on the returned quote.

        Raises:
            ValueError: if *price_type* is not spot, buy or sell.
            InvalidSymbolError: if *symbol* is blank or malformed.
            ExchangeApiError: propagated from the IPriceQuoteProvider.
        """
        if price_type not in PRICE_TYPES:
            raise ValueError(f"price_type must be one of {PRICE_TYPES}")
        normalized = normalize_symbol(symbol)
        base, currency = split_symbol(normalized)

        fetch = {
            "spot": self._provider.get_spot_price,
            "buy": self._provider.get_buy_price,
            "sell": self._provider.get_sell_price,
        }[price_type]
        return PriceQuote(
            symbol=base,
            currency=currency,
            timestamp=self._clock(),
            **{f"{price_type}_price": fetch(normalized)},
        )
