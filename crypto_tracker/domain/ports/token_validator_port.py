"""
Port (interface) for bearer token validators.
Infrastructure adapters (e.g. CognitoTokenValidator) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> dict:
        """Validate an ID or access token and return its decoded claims.

        Raises:
            ValueError: if the token is invalid, expired, or fails client/issuer checks.
        """
        ...

    @staticmethod
    def username(claims: dict) -> str | None:
        """Return the user name carried by ID ("cognito:username") or access ("username") tokens."""
        return claims.get("cognito:username") or claims.get("username")
