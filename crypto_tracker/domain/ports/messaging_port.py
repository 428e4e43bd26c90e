"""
Port (interface) for outbound messaging gateways.
Infrastructure adapters (e.g. VonageMessageSender) must implement this interface.
"""

from abc import ABC, abstractmethod


class IMessageSender(ABC):
    @abstractmethod
    def send_message(self, to_phone_number: str, text: str) -> bool:
        """Send *text* and report delivery acceptance; never raises."""
        ...
