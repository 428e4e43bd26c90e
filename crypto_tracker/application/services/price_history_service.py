"""
Application service: persistent price history and trend analysis.

Business decisions owned here:
  - RETENTION: every stored record expires retention_days after it is written.
  - Trend window: the moving average spans moving_average_days of sell prices.
  - Latest record: looked up within the last LATEST_RECORD_WINDOW_DAYS only.

The repository and quote provider are injected; no boto3 or pynamodb here.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from crypto_tracker.domain.analytics import build_trend, moving_average, percent_change
from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.price import PriceChange, PriceQuote, PriceRecord, TrendData
from crypto_tracker.domain.ports.price_history_repository_port import IPriceHistoryRepository
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.symbols import normalize_symbol

logger = logging.getLogger(__name__)


class PriceHistoryService:
    LATEST_RECORD_WINDOW_DAYS: int = 2

    def __init__(
        self,
        repository: IPriceHistoryRepository,
        provider: IPriceQuoteProvider,
        retention_days: int = 30,
        moving_average_days: int = 7,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._provider = provider
        self._retention_days = retention_days
        self._moving_average_days = moving_average_days
        self._clock = clock

    def record_price(self, symbol: str) -> None:
        """Fetch and store the current prices of *symbol*.

        Failures are logged and swallowed; recording is best effort.
        """
        normalized = normalize_symbol(symbol)
        try:
            quote = self._provider.get_all_prices(normalized)
            self._repository.save(self._to_record(normalized, quote))
        except Exception as exc:
            logger.error("Failed to record price for %s: %s", normalized, exc)
            return
        logger.info("Recorded price for %s: sell=%s", normalized, quote.sell_price)

    def get_price_history(self, symbol: str, days: int) -> list[PriceRecord]:
        """Records of the last *days* days, oldest first."""
        normalized = normalize_symbol(symbol)
        since = self._clock() - timedelta(days=days)
        return self._repository.find_since(normalized, since)

    def calculate_moving_average(self, symbol: str, days: Optional[int] = None) -> Optional[Decimal]:
        window = days if days is not None else self._moving_average_days
        records = self.get_price_history(symbol, window)
        if not records:
            logger.warning("No price history for %s in the last %d days", symbol, window)
            return None
        return moving_average(record.sell_price for record in records)

    def analyze_trend(self, symbol: str) -> TrendData:
        """Compare the current sell price of *symbol* with its moving average.

        Raises:
            ExchangeApiError: when the current price cannot be fetched.
        """
        normalized = normalize_symbol(symbol)
        average = self.calculate_moving_average(normalized)
        current = self._provider.get_all_prices(normalized).sell_price
        trend = build_trend(current, average)
        if average is None:
            logger.warning("Insufficient data for trend analysis of %s", normalized)
        else:
            logger.info(
                "Trend for %s: current=%s, average=%s, upwards=%s",
                normalized, current, average, trend.trending_upwards,
            )
        return trend

    def is_trending_upwards(self, symbol: str) -> bool:
        return self.analyze_trend(symbol).trending_upwards

    def get_latest_record(self, symbol: str) -> Optional[PriceRecord]:
        records = self.get_price_history(symbol, self.LATEST_RECORD_WINDOW_DAYS)
        return records[-1] if records else None

    def record_price_with_change(self, symbol: str, quote: PriceQuote) -> PriceChange:
        """Store *quote* with its change against the latest stored spot price.

        The average change covers the stored daily changes inside the moving
        average window, including the one just written.
        """
        normalized = normalize_symbol(symbol)
        previous = self.get_latest_record(normalized)
        daily_change = percent_change(
            previous.spot_price if previous else None,
            quote.spot_price,
        )

        self._repository.save(self._to_record(normalized, quote, daily_change))

        history = self.get_price_history(normalized, self._moving_average_days)
        changes = [r.daily_change_percent for r in history if r.daily_change_percent is not None]
        return PriceChange(
            current_price=quote.spot_price,
            daily_change_percent=daily_change,
            avg_change_percent=moving_average(changes),
            days_of_data=len(changes),
        )

    def _to_record(
        self,
        normalized: str,
        quote: PriceQuote,
        daily_change: Optional[Decimal] = None,
    ) -> PriceRecord:
        now = self._clock()
        return PriceRecord(
            symbol=normalized,
            timestamp=now,
            spot_price=quote.spot_price,
            buy_price=quote.buy_price,
            sell_price=quote.sell_price,
            daily_change_percent=daily_change,
            ttl=int((now + timedelta(days=self._retention_days)).timestamp()),
        )
