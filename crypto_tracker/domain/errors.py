"""
Domain errors for the price tracker.

Raised from the domain and application layers and mapped to HTTP responses by
the entrypoints. No framework imports allowed.
"""

from datetime import datetime


class TrackerError(Exception):
    """Base error for all price tracker errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidSymbolError(TrackerError):
    """Raised when a symbol cannot be parsed as BASE or BASE-CURRENCY."""

    def __init__(self, symbol: str) -> None:
        super().__init__(
            f"Invalid symbol {symbol!r}. Expected format: BASE-CURRENCY (e.g., BTC-USD)"
        )
        self.symbol = symbol


class SymbolNotEnrolledError(TrackerError):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            f"Symbol {symbol} is not enrolled. "
            f"Please enroll first using POST /api/v1/enroll/{symbol}"
        )
        self.symbol = symbol


class RecommendationNotAvailableError(TrackerError):
    """Raised while an enrolled symbol is still inside its waiting period."""

    def __init__(self, symbol: str, available_at: datetime, days_remaining: int) -> None:
        super().__init__(
            f"Recommendation not yet available for {symbol}. "
            f"Available in {days_remaining} day(s)."
        )
        self.symbol = symbol
        self.available_at = available_at
        self.days_remaining = days_remaining


class ExchangeApiError(TrackerError):
    """Raised when the exchange quote API fails or returns an unusable payload.

    status_code carries the upstream HTTP status so the entrypoint can answer
    with the same status.
    """

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Exchange API error ({status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail


class SubscriptionStoreError(TrackerError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to save subscription: {reason}")
        self.reason = reason
