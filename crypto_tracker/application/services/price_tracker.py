"""
Application service: process-local price tracking.

Holds the set of tracked symbols and a bounded history per symbol. This is an
in-memory cache for the history endpoint only; nothing here is persisted and
the oldest points are dropped once max_history_records is reached.
"""

import logging
import threading
from collections import deque

from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.price import PriceHistory, PricePoint, PriceQuote, TrackingStatus
from crypto_tracker.domain.errors import ExchangeApiError
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.symbols import normalize_symbol, split_symbol

logger = logging.getLogger(__name__)


class PriceTrackingService:
    def __init__(
        self,
        provider: IPriceQuoteProvider,
        max_history_records: int = 100,
        clock: Clock = utc_now,
    ) -> None:
        self._provider = provider
        self._max_history_records = max_history_records
        self._clock = clock
        self._lock = threading.Lock()
        self._tracked: set[str] = set()
        self._history: dict[str, deque[PricePoint]] = {}

    def start_tracking(self, symbol: str) -> str:
        """Track *symbol* and record its current price. Returns the normalized symbol."""
        normalized = normalize_symbol(symbol)
        with self._lock:
            self._tracked.add(normalized)
            self._history.setdefault(normalized, deque(maxlen=self._max_history_records))
        logger.info("Started tracking symbol: %s", normalized)

        self._record_current_price(normalized)
        return normalized

    def stop_tracking(self, symbol: str) -> str:
        normalized = normalize_symbol(symbol)
        with self._lock:
            self._tracked.discard(normalized)
            self._history.pop(normalized, None)
        logger.info("Stopped tracking symbol: %s", normalized)
        return normalized

    def is_tracking(self, symbol: str) -> bool:
        normalized = normalize_symbol(symbol)
        with self._lock:
            return normalized in self._tracked

    def get_tracking_status(self) -> TrackingStatus:
        with self._lock:
            tracked = sorted(self._tracked)
        return TrackingStatus(
            tracked_symbols=tracked,
            total_tracked=len(tracked),
            timestamp=self._clock(),
        )

    def get_price_history(self, symbol: str) -> PriceHistory:
        """Return the cached history, starting to track *symbol* if needed.

        A fresh point is recorded on every call.
        """
        normalized = normalize_symbol(symbol)
        if self.is_tracking(normalized):
            self._record_current_price(normalized)
        else:
            self.start_tracking(normalized)

        with self._lock:
            points = list(self._history.get(normalized, ()))

        base, currency = split_symbol(normalized)
        return PriceHistory(
            symbol=base,
            currency=currency,
            history=points,
            total_records=len(points),
        )

    def record_and_get_price(self, symbol: str) -> PriceQuote:
        """Fetch all prices for *symbol*, appending them to its history when tracked.

        Raises:
            ExchangeApiError: when the quote cannot be fetched.
        """
        normalized = normalize_symbol(symbol)
        quote = self._provider.get_all_prices(normalized)
        self._append(normalized, quote)
        return quote

    def _record_current_price(self, normalized: str) -> None:
        try:
            quote = self._provider.get_all_prices(normalized)
        except ExchangeApiError as exc:
            logger.error("Failed to record price for %s: %s", normalized, exc.message)
            return
        self._append(normalized, quote)

    def _append(self, normalized: str, quote: PriceQuote) -> None:
        point = PricePoint(
            spot_price=quote.spot_price,
            buy_price=quote.buy_price,
            sell_price=quote.sell_price,
            timestamp=self._clock(),
        )
        with self._lock:
            history = self._history.get(normalized)
            if history is None:
                return
            history.append(point)
        logger.debug(
            "Recorded price for %s: spot=%s, buy=%s, sell=%s",
            normalized, quote.spot_price, quote.buy_price, quote.sell_price,
        )
