"""
Infrastructure adapter: Coinbase public REST API (v2) → IPriceQuoteProvider.
All Coinbase-specific details (URL layout, {"data": {...}} envelopes) are confined here;
the rest of the codebase depends only on IPriceQuoteProvider.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.price import CoinInfo, PriceQuote
from crypto_tracker.domain.errors import ExchangeApiError
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.symbols import normalize_symbol, split_symbol

logger = logging.getLogger(__name__)

USER_AGENT = "CoinbasePriceTracker/1.0"


class CoinbasePriceQuoteProvider(IPriceQuoteProvider):
    """Fetches spot, buy and sell prices from the Coinbase v2 API."""

    def __init__(
        self,
        base_url: str = "https://api.coinbase.com/v2",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )
        self._clock = clock

    def get_spot_price(self, symbol: str) -> Decimal:
        return self._get_price(symbol, "spot")

    def get_buy_price(self, symbol: str) -> Decimal:
        return self._get_price(symbol, "buy")

    def get_sell_price(self, symbol: str) -> Decimal:
        return self._get_price(symbol, "sell")

    def get_all_prices(self, symbol: str) -> PriceQuote:
        normalized = normalize_symbol(symbol)
        base, currency = split_symbol(normalized)
        return PriceQuote(
            symbol=base,
            currency=currency,
            spot_price=self.get_spot_price(normalized),
            buy_price=self.get_buy_price(normalized),
            sell_price=self.get_sell_price(normalized),
            timestamp=self._clock(),
        )

    def get_popular_coins(self, limit: int = 100) -> list[CoinInfo]:
        payload = self._get("/currencies/crypto")
        entries = payload.get("data") or []

        coins: list[CoinInfo] = []
        for entry in entries:
            code, name = entry.get("code"), entry.get("name")
            if not code or not name:
                continue
            coins.append(CoinInfo(symbol=code, name=name, display_name=f"{name} ({code})"))
            if len(coins) >= limit:
                break
        return coins

    def _get_price(self, symbol: str, price_type: str) -> Decimal:
        normalized = normalize_symbol(symbol)
        payload = self._get(f"/prices/{normalized}/{price_type}")
        try:
            return Decimal(str(payload["data"]["amount"]))
        except (KeyError, TypeError, InvalidOperation) as exc:
            raise ExchangeApiError(502, f"Unexpected {price_type} price payload for {normalized}") from exc

    def _get(self, path: str) -> dict:
        try:
            response = self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Coinbase API error for %s: HTTP %d", path, status)
            raise ExchangeApiError(status, exc.response.text) from exc
        except httpx.RequestError as exc:
            logger.error("Coinbase API unreachable for %s: %s", path, exc)
            raise ExchangeApiError(503, str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise ExchangeApiError(502, f"Empty response from {path}")
        return payload
