"""
Application service: WhatsApp digest subscribers.

The subscriber list is read and written as a whole through ISubscriberStore;
the store is the source of truth, nothing is cached between calls.
"""

import logging
from dataclasses import replace
from typing import Optional

from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.subscriber import Subscriber, SubscriptionResult
from crypto_tracker.domain.ports.subscriber_store_port import ISubscriberStore
from crypto_tracker.domain.symbols import mask_phone_number, with_default_coin

logger = logging.getLogger(__name__)

SUBSCRIBED_MESSAGE = "Successfully subscribed to crypto price notifications"
ALREADY_SUBSCRIBED_MESSAGE = "Phone number is already subscribed"


class SubscriptionService:
    def __init__(self, store: ISubscriberStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def subscribe(self, phone_number: str, name: Optional[str] = None) -> SubscriptionResult:
        """Add *phone_number* to the subscriber list unless it is already there.

        Raises:
            SubscriptionStoreError: when the updated list cannot be saved.
        """
        subscribers = self._store.load()
        existing = self._find(subscribers, phone_number)
        if existing is not None:
            return SubscriptionResult(
                phone_number=mask_phone_number(phone_number),
                message=ALREADY_SUBSCRIBED_MESSAGE,
                subscribed_at=existing.subscribed_at or self._clock(),
            )

        now = self._clock()
        subscribers.append(Subscriber(phone_number=phone_number, name=name, subscribed_at=now))
        self._store.save(subscribers)
        logger.info("New subscriber: %s", mask_phone_number(phone_number))
        return SubscriptionResult(
            phone_number=mask_phone_number(phone_number),
            message=SUBSCRIBED_MESSAGE,
            subscribed_at=now,
        )

    def subscribe_with_coins(
        self,
        phone_number: str,
        name: Optional[str],
        cognito_user_id: Optional[str],
        selected_coins: Optional[list[str]],
    ) -> SubscriptionResult:
        """Create or update the subscriber linked to an identity account.

        An existing subscriber keeps its name and subscription date; its coins
        and account id are replaced.
        """
        coins = with_default_coin(selected_coins) or []
        subscribers = self._store.load()
        existing = self._find(subscribers, phone_number)

        if existing is not None:
            updated = replace(existing, cognito_user_id=cognito_user_id, selected_coins=coins)
            subscribers = [updated if s is existing else s for s in subscribers]
            self._store.save(subscribers)
            logger.info("Updated subscriber: %s", mask_phone_number(phone_number))
            return SubscriptionResult(
                phone_number=mask_phone_number(phone_number),
                message=SUBSCRIBED_MESSAGE,
                subscribed_at=existing.subscribed_at or self._clock(),
            )

        now = self._clock()
        subscribers.append(
            Subscriber(
                phone_number=phone_number,
                name=name,
                subscribed_at=now,
                cognito_user_id=cognito_user_id,
                selected_coins=coins,
            )
        )
        self._store.save(subscribers)
        logger.info("New subscriber with coins: %s", mask_phone_number(phone_number))
        return SubscriptionResult(
            phone_number=mask_phone_number(phone_number),
            message=SUBSCRIBED_MESSAGE,
            subscribed_at=now,
        )

    def get_subscriber_by_phone_number(self, phone_number: str) -> Optional[Subscriber]:
        return self._find(self._store.load(), phone_number)

    def update_selected_coins(self, phone_number: str, selected_coins: list[str]) -> bool:
        """Replace the coins of a subscriber. Returns False for an unknown number."""
        subscribers = self._store.load()
        existing = self._find(subscribers, phone_number)
        if existing is None:
            return False

        updated = replace(existing, selected_coins=with_default_coin(selected_coins) or [])
        self._store.save([updated if s is existing else s for s in subscribers])
        logger.info("Updated coins for %s", mask_phone_number(phone_number))
        return True

    def get_all_subscribers(self) -> list[Subscriber]:
        return self._store.load()

    @staticmethod
    def _find(subscribers: list[Subscriber], phone_number: str) -> Optional[Subscriber]:
        return next((s for s in subscribers if s.phone_number == phone_number), None)
