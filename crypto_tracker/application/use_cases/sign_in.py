"""
Use-case: sign a subscriber in and attach their stored profile.
"""

from dataclasses import replace

from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.domain.entities.subscriber import AuthResult
from crypto_tracker.domain.ports.identity_port import IIdentityProvider


class SignInUseCase:
    def __init__(self, identity: IIdentityProvider, subscriptions: SubscriptionService) -> None:
        self._identity = identity
        self._subscriptions = subscriptions

    def execute(self, phone_number: str, password: str) -> AuthResult:
        result = self._identity.sign_in(phone_number, password)
        if not result.success:
            return result
        subscriber = self._subscriptions.get_subscriber_by_phone_number(phone_number)
        return replace(result, subscriber=subscriber)
