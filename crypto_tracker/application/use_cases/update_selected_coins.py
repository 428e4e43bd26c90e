"""
Use-case: replace the coins a subscriber follows.
BTC is always kept as the first coin.
"""

from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.domain.entities.subscriber import AuthResult

UPDATED_MESSAGE = "Coins updated successfully"
NOT_FOUND_MESSAGE = "Subscriber not found"


class UpdateSelectedCoinsUseCase:
    def __init__(self, subscriptions: SubscriptionService) -> None:
        self._subscriptions = subscriptions

    def execute(self, phone_number: str, selected_coins: list[str]) -> AuthResult:
        if not self._subscriptions.update_selected_coins(phone_number, selected_coins):
            return AuthResult(success=False, message=NOT_FOUND_MESSAGE)
        return AuthResult(
            success=True,
            message=UPDATED_MESSAGE,
            subscriber=self._subscriptions.get_subscriber_by_phone_number(phone_number),
        )
