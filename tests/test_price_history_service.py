"""
Tests for persistent price history, trend analysis and daily change.

Uses an in-memory repository, a mocked quote provider and a controllable clock.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from crypto_tracker.application.services.price_history_service import PriceHistoryService
from crypto_tracker.domain.entities.price import PriceRecord
from crypto_tracker.domain.errors import ExchangeApiError
from crypto_tracker.domain.ports.price_history_repository_port import IPriceHistoryRepository
from tests.conftest import FIXED_NOW, make_quote


@pytest.fixture
def service(price_history_repository, quote_provider, clock) -> PriceHistoryService:
    return PriceHistoryService(price_history_repository, quote_provider, clock=clock)


def _record(days_ago: float, sell: str, spot: str = None, change: str = None) -> PriceRecord:
    return PriceRecord(
        symbol="BTC-USD",
        timestamp=FIXED_NOW - timedelta(days=days_ago),
        spot_price=Decimal(spot) if spot else None,
        buy_price=None,
        sell_price=Decimal(sell),
        daily_change_percent=Decimal(change) if change else None,
    )


class TestRecordPrice:
    """Tests for record_price."""

    def test_stores_quote_with_ttl(self, service, price_history_repository) -> None:
        """Records expire retention_days after they are written."""
        service.record_price("btc")
        [record] = price_history_repository.records
        assert record.symbol == "BTC-USD"
        assert record.sell_price == Decimal("99.00")
        assert record.ttl == int((FIXED_NOW + timedelta(days=30)).timestamp())

    def test_failures_are_swallowed(self, quote_provider, clock) -> None:
        repository = MagicMock(spec=IPriceHistoryRepository)
        repository.save.side_effect = RuntimeError("table missing")
        PriceHistoryService(repository, quote_provider, clock=clock).record_price("BTC")

        quote_provider.get_all_prices.side_effect = ExchangeApiError(503, "down")
        PriceHistoryService(repository, quote_provider, clock=clock).record_price("BTC")


class TestTrend:
    """Tests for moving average and trend analysis."""

    def test_moving_average_uses_window(self, service, price_history_repository) -> None:
        price_history_repository.records += [
            _record(10, "500.00"),
            _record(3, "100.00"),
            _record(1, "110.00"),
        ]
        assert service.calculate_moving_average("BTC") == Decimal("105.00")
        assert service.calculate_moving_average("BTC", days=30) == Decimal("236.67")

    def test_no_history(self, service) -> None:
        assert service.calculate_moving_average("BTC") is None
        trend = service.analyze_trend("BTC")
        assert trend.trending_upwards is False
        assert trend.percent_above_average == 0.0

    def test_trend_below_average(self, service, price_history_repository) -> None:
        price_history_repository.records += [_record(3, "100.00"), _record(1, "110.00")]
        trend = service.analyze_trend("BTC")
        assert trend.current_price == Decimal("99.00")
        assert trend.seven_day_moving_average == Decimal("105.00")
        assert trend.trending_upwards is False
        assert trend.percent_above_average == pytest.approx(-5.71)

    def test_trend_above_average(self, service, price_history_repository, quote_provider) -> None:
        price_history_repository.records.append(_record(1, "90.00"))
        assert service.is_trending_upwards("BTC") is True


class TestLatestRecordAndChange:
    """Tests for get_latest_record and record_price_with_change."""

    def test_latest_record_ignores_old_entries(self, service, price_history_repository) -> None:
        price_history_repository.records.append(_record(3, "100.00"))
        assert service.get_latest_record("BTC") is None

        price_history_repository.records.append(_record(1, "101.00"))
        assert service.get_latest_record("BTC").sell_price == Decimal("101.00")

    def test_first_record_has_no_change(self, service) -> None:
        change = service.record_price_with_change("BTC", make_quote(spot="100.00"))
        assert change.current_price == Decimal("100.00")
        assert change.daily_change_percent is None
        assert change.avg_change_percent is None
        assert change.days_of_data == 0

    def test_change_against_previous_spot(self, service, price_history_repository) -> None:
        """The daily change compares spot prices; the average spans stored changes."""
        price_history_repository.records += [
            _record(2.5, "90.00", spot="95.00", change="4.00"),
            _record(1, "99.00", spot="100.00", change="2.00"),
        ]
        change = service.record_price_with_change("btc", make_quote(spot="110.00", sell="1.00"))
        assert change.daily_change_percent == Decimal("10.00")
        assert change.avg_change_percent == Decimal("5.33")
        assert change.days_of_data == 3
        assert price_history_repository.records[-1].daily_change_percent == Decimal("10.00")
