"""
Symbol, phone-number and currency formatting helpers.
Pure functions shared by every layer; no IO.
"""

from decimal import Decimal
from typing import Optional

from crypto_tracker.domain.errors import InvalidSymbolError

DEFAULT_CURRENCY = "USD"
DEFAULT_COIN = "BTC"


def normalize_symbol(symbol: str) -> str:
    """Return the exchange product id for *symbol*: "btc" -> "BTC-USD".

    Symbols that already carry a currency ("eth-eur") are only uppercased, so
    the function is idempotent.
    """
    if not symbol or not symbol.strip():
        raise InvalidSymbolError(symbol)
    cleaned = symbol.strip().upper()
    if "-" in cleaned:
        return cleaned
    return f"{cleaned}-{DEFAULT_CURRENCY}"


def split_symbol(symbol: str) -> tuple[str, str]:
    """Split *symbol* into (base, currency) after normalization."""
    parts = normalize_symbol(symbol).split("-")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidSymbolError(symbol)
    return parts[0], parts[1]


def base_symbol(symbol: str) -> str:
    return symbol.strip().upper().split("-")[0]


def mask_phone_number(phone_number: Optional[str]) -> str:
    """Keep the first three and last two characters of a phone number."""
    if phone_number is None or len(phone_number) < 4:
        return "****"
    return f"{phone_number[:3]}****{phone_number[-2:]}"


def format_usd(amount: Optional[Decimal]) -> str:
    if amount is None:
        return "N/A"
    return f"${amount:,.2f}"


def with_default_coin(coins: Optional[list[str]]) -> Optional[list[str]]:
    """Return *coins* with BTC first; None stays None (nothing selected)."""
    if coins is None:
        return None
    if DEFAULT_COIN in coins:
        return list(coins)
    return [DEFAULT_COIN, *coins]
