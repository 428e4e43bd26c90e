"""
Tests for the Coinbase quote provider.

HTTP is served by httpx.MockTransport; no network access.
"""

import json
from decimal import Decimal

import httpx
import pytest

from crypto_tracker.domain.errors import ExchangeApiError, InvalidSymbolError
from crypto_tracker.infrastructure.exchange.coinbase_adapter import CoinbasePriceQuoteProvider
from tests.conftest import FIXED_NOW

BASE_URL = "https://api.coinbase.com/v2"
PRICES = {"spot": "97000.50", "buy": "97100.00", "sell": "96900.25"}


def _provider(handler, clock=None) -> CoinbasePriceQuoteProvider:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    if clock is None:
        return CoinbasePriceQuoteProvider(client=client)
    return CoinbasePriceQuoteProvider(client=client, clock=clock)


def _price_handler(request: httpx.Request) -> httpx.Response:
    *_, product, price_type = request.url.path.split("/")
    return httpx.Response(
        200, json={"data": {"amount": PRICES[price_type], "base": product[:3], "currency": "USD"}}
    )


class TestPrices:
    """Tests for single and combined price lookups."""

    def test_spot_price(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return _price_handler(request)

        assert _provider(handler).get_spot_price("btc") == Decimal("97000.50")
        assert seen == ["/v2/prices/BTC-USD/spot"]

    def test_all_prices(self, clock) -> None:
        quote = _provider(_price_handler, clock).get_all_prices("btc-usd")
        assert quote.symbol == "BTC"
        assert quote.currency == "USD"
        assert quote.spot_price == Decimal("97000.50")
        assert quote.buy_price == Decimal("97100.00")
        assert quote.sell_price == Decimal("96900.25")
        assert quote.timestamp == FIXED_NOW

    def test_blank_symbol_rejected(self) -> None:
        with pytest.raises(InvalidSymbolError):
            _provider(_price_handler).get_buy_price("  ")


class TestErrors:
    """Tests for upstream failure mapping."""

    def test_upstream_status_kept(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"errors": [{"id": "not_found"}]})

        with pytest.raises(ExchangeApiError) as exc_info:
            _provider(handler).get_spot_price("NOPE")
        assert exc_info.value.status_code == 404

    def test_connection_failure_is_503(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExchangeApiError) as exc_info:
            _provider(handler).get_sell_price("BTC")
        assert exc_info.value.status_code == 503

    @pytest.mark.parametrize(
        "content",
        [b"not json", json.dumps([1, 2]).encode(), json.dumps({"data": {}}).encode()],
    )
    def test_unusable_payload_is_502(self, content: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=content)

        with pytest.raises(ExchangeApiError) as exc_info:
            _provider(handler).get_spot_price("BTC")
        assert exc_info.value.status_code == 502


class TestPopularCoins:
    """Tests for get_popular_coins."""

    def _handler(self, request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v2/currencies/crypto"
        return httpx.Response(
            200,
            json={
                "data": [
                    {"code": "BTC", "name": "Bitcoin"},
                    {"code": "ETH"},
                    {"code": "ETH", "name": "Ethereum"},
                    {"code": "SOL", "name": "Solana"},
                ]
            },
        )

    def test_incomplete_entries_skipped(self) -> None:
        coins = _provider(self._handler).get_popular_coins()
        assert [coin.symbol for coin in coins] == ["BTC", "ETH", "SOL"]
        assert coins[0].display_name == "Bitcoin (BTC)"

    def test_limit(self) -> None:
        coins = _provider(self._handler).get_popular_coins(limit=2)
        assert [coin.name for coin in coins] == ["Bitcoin", "Ethereum"]
