"""
Application service: the scheduled price digest.

One market analysis and one digest body are built per run and shared by
every subscriber; only the greeting is personalized. Delivery failures are
counted, never raised.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from crypto_tracker.application.services.price_history_service import PriceHistoryService
from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.price import PriceQuote
from crypto_tracker.domain.entities.subscriber import Subscriber
from crypto_tracker.domain.ports.market_analysis_port import IMarketAnalysisProvider
from crypto_tracker.domain.ports.messaging_port import IMessageSender
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.symbols import format_usd, mask_phone_number

logger = logging.getLogger(__name__)

DIGEST_FOOTER = "\n- CryptoTracker"
DEFAULT_SUBSCRIBER_NAME = "Subscriber"


@dataclass(frozen=True)
class DigestReport:
    success_count: int
    failure_count: int


class NotificationService:
    def __init__(
        self,
        subscriptions: SubscriptionService,
        provider: IPriceQuoteProvider,
        sender: IMessageSender,
        analysis: IMarketAnalysisProvider,
        symbols: list[str],
        price_history: Optional[PriceHistoryService] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._subscriptions = subscriptions
        self._provider = provider
        self._sender = sender
        self._analysis = analysis
        self._symbols = symbols
        self._price_history = price_history
        self._clock = clock

    def send_price_notifications(self) -> DigestReport:
        """Send the digest to every subscriber.

        Raises:
            Whatever the subscriber store raises while loading.
        """
        subscribers = self._subscriptions.get_all_subscribers()
        if not subscribers:
            logger.info("No subscribers found, skipping notification job")
            return DigestReport(success_count=0, failure_count=0)

        logger.info("Found %d subscribers to notify", len(subscribers))
        analysis = self._analysis.get_market_analysis()
        logger.info("Market sentiment: %s %s", analysis.sentiment, analysis.emoji)

        digest = self.build_price_digest()

        sent = failed = 0
        for subscriber in subscribers:
            message = self.build_personalized_message(subscriber, digest, analysis.emoji)
            if self._sender.send_message(subscriber.phone_number, message):
                sent += 1
            else:
                failed += 1
                logger.warning("Digest not delivered to %s", mask_phone_number(subscriber.phone_number))

        logger.info("Notification job completed. Success: %d, Failed: %d", sent, failed)
        return DigestReport(success_count=sent, failure_count=failed)

    def build_price_digest(self) -> str:
        lines = []
        for symbol in self._symbols:
            try:
                quote = self._provider.get_all_prices(symbol)
            except Exception as exc:
                logger.warning("Failed to get price for %s: %s", symbol, exc)
                lines.append(f"{symbol}: N/A\n")
                continue

            line = f"{symbol}: {format_usd(quote.spot_price)}"
            if quote.spot_price is not None:
                change = self._record_change(symbol, quote)
                if change is not None:
                    line += f" ({change:+.2f}%)"
            lines.append(line + "\n")

        return "".join(lines) + DIGEST_FOOTER

    def build_personalized_message(self, subscriber: Subscriber, digest: str, emoji: str) -> str:
        name = subscriber.name or DEFAULT_SUBSCRIBER_NAME
        day = self.days_since_subscribing(subscriber.subscribed_at)
        return (
            f"Hi {name}! "
            "You are well on your way to the path of crypto riches! "
            f"Day {day} of greatness! "
            "Magic is in the work. Here is your SunCoin Digest:\n\n"
            f"{digest}\n\n{emoji}"
        )

    def days_since_subscribing(self, subscribed_at: Optional[datetime]) -> int:
        """Day 1 is the day of subscription."""
        if subscribed_at is None:
            return 1
        return (self._clock() - subscribed_at).days + 1

    def _record_change(self, symbol: str, quote: PriceQuote) -> Optional[Decimal]:
        if self._price_history is None:
            return None
        try:
            return self._price_history.record_price_with_change(symbol, quote).daily_change_percent
        except Exception as exc:
            logger.warning("Failed to record price change for %s: %s", symbol, exc)
            return None
