"""
Domain entities for subscribers and identity-provider results.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subscriber:
    phone_number: str
    name: Optional[str]
    subscribed_at: Optional[datetime]
    cognito_user_id: Optional[str] = None
    selected_coins: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SubscriptionResult:
    """Outcome of a subscribe call; phone_number is always masked."""

    phone_number: str
    message: str
    subscribed_at: datetime


@dataclass(frozen=True)
class AuthResult:
    success: bool
    message: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    cognito_user_id: Optional[str] = None
    subscriber: Optional[Subscriber] = None
    requires_verification: bool = False
