"""
Infrastructure adapter: Vonage Messages API (WhatsApp channel) → IMessageSender.
Delivery failures are logged and reported as False; nothing is raised.
"""

import logging
from typing import Optional

import httpx

from crypto_tracker.domain.ports.messaging_port import IMessageSender
from crypto_tracker.domain.symbols import mask_phone_number

logger = logging.getLogger(__name__)


class VonageWhatsAppSender(IMessageSender):
    def __init__(
        self,
        api_key: str,
        api_secret: str,
        from_number: str,
        api_url: str = "https://messages-sandbox.nexmo.com/v1/messages",
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._auth = httpx.BasicAuth(api_key, api_secret)
        self._from_number = from_number
        self._api_url = api_url
        self._client = client or httpx.Client(timeout=10.0)

    def send_message(self, to_phone_number: str, text: str) -> bool:
        masked = mask_phone_number(to_phone_number)
        logger.info("Sending WhatsApp message to %s", masked)
        body = {
            "from": self._from_number,
            "to": to_phone_number.replace("+", ""),
            "message_type": "text",
            "text": text,
            "channel": "whatsapp",
        }
        try:
            response = self._client.post(
                self._api_url,
                json=body,
                auth=self._auth,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Failed to send WhatsApp message to %s: %s", masked, exc)
            return False

        logger.info("WhatsApp message sent to %s", masked)
        logger.debug("Vonage response: %s", response.text)
        return True
