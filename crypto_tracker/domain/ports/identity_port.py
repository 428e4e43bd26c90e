"""
Port (interface) for managed identity providers.
Infrastructure adapters (e.g. CognitoIdentityProvider) must implement this interface.
Every method reports failures through AuthResult instead of raising.
"""

from abc import ABC, abstractmethod
from typing import Optional

from crypto_tracker.domain.entities.subscriber import AuthResult


class IIdentityProvider(ABC):
    @abstractmethod
    def sign_up(self, phone_number: str, password: str, name: Optional[str] = None) -> AuthResult: ...

    @abstractmethod
    def confirm_sign_up(self, phone_number: str, code: str) -> AuthResult: ...

    @abstractmethod
    def sign_in(self, phone_number: str, password: str) -> AuthResult: ...

    @abstractmethod
    def resend_confirmation_code(self, phone_number: str) -> AuthResult: ...

    @abstractmethod
    def get_username_from_token(self, access_token: str) -> Optional[str]: ...
