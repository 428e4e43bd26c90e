"""
Tests for the Vonage WhatsApp sender.

HTTP is served by httpx.MockTransport; no network access.
"""

import base64
import json

import httpx

from crypto_tracker.infrastructure.messaging.vonage_adapter import VonageWhatsAppSender

API_URL = "https://messages-sandbox.nexmo.com/v1/messages"


def _sender(handler) -> VonageWhatsAppSender:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return VonageWhatsAppSender("key", "secret", "14157386102", api_url=API_URL, client=client)


class TestSendMessage:
    """Tests for send_message."""

    def test_request_shape(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(202, json={"message_uuid": "abc"})

        assert _sender(handler).send_message("+15551234567", "hello") is True
        assert seen["url"] == API_URL
        assert seen["auth"] == "Basic " + base64.b64encode(b"key:secret").decode()
        assert seen["body"] == {
            "from": "14157386102",
            "to": "15551234567",
            "message_type": "text",
            "text": "hello",
            "channel": "whatsapp",
        }

    def test_rejected_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"title": "Unauthorized"})

        assert _sender(handler).send_message("+15551234567", "hello") is False

    def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        assert _sender(handler).send_message("+15551234567", "hello") is False
