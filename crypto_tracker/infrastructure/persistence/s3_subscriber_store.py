"""
Infrastructure adapter: a single JSON object in S3 → ISubscriberStore.

Object layout (key subscribers.json):
    {"subscribers": [{"phoneNumber", "name", "subscribedAt",
                      "cognitoUserId", "selectedCoins"}, ...]}
The whole list is rewritten on every save; concurrent writers are last-write-wins.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from crypto_tracker.domain.entities.subscriber import Subscriber
from crypto_tracker.domain.errors import SubscriptionStoreError
from crypto_tracker.domain.ports.subscriber_store_port import ISubscriberStore

logger = logging.getLogger(__name__)

SUBSCRIBERS_KEY = "subscribers.json"
_MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


class S3SubscriberStore(ISubscriberStore):
    def __init__(
        self,
        bucket: str,
        region: str | None = None,
        client: Any = None,
    ) -> None:
        self._bucket = bucket
        self._client = client or boto3.client("s3", region_name=region)

    def load(self) -> list[Subscriber]:
        """Read every subscriber; a missing or unreadable object reads as empty."""
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=SUBSCRIBERS_KEY)
            document = json.loads(response["Body"].read())
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in _MISSING_OBJECT_CODES:
                logger.info("No subscribers object in bucket %s yet", self._bucket)
            else:
                logger.error("Failed to read subscribers from S3: %s", exc)
            return []
        except (BotoCoreError, ValueError) as exc:
            logger.error("Failed to read subscribers from S3: %s", exc)
            return []

        try:
            return [self._from_json(entry) for entry in document.get("subscribers") or []]
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.error("Malformed subscribers object in bucket %s: %s", self._bucket, exc)
            return []

    def save(self, subscribers: list[Subscriber]) -> None:
        """Overwrite the subscribers object.

        Raises:
            SubscriptionStoreError: when the object cannot be written.
        """
        body = json.dumps({"subscribers": [self._to_json(s) for s in subscribers]}, indent=2)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=SUBSCRIBERS_KEY,
                Body=body.encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Failed to save subscribers to S3: %s", exc)
            raise SubscriptionStoreError(str(exc)) from exc
        logger.info("Saved %d subscribers to S3", len(subscribers))

    @staticmethod
    def _to_json(subscriber: Subscriber) -> dict:
        return {
            "phoneNumber": subscriber.phone_number,
            "name": subscriber.name,
            "subscribedAt": (
                subscriber.subscribed_at.isoformat() if subscriber.subscribed_at else None
            ),
            "cognitoUserId": subscriber.cognito_user_id,
            "selectedCoins": list(subscriber.selected_coins),
        }

    @staticmethod
    def _from_json(entry: dict) -> Subscriber:
        return Subscriber(
            phone_number=entry["phoneNumber"],
            name=entry.get("name"),
            subscribed_at=_parse_timestamp(entry.get("subscribedAt")),
            cognito_user_id=entry.get("cognitoUserId"),
            selected_coins=list(entry.get("selectedCoins") or []),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept ISO-8601 strings and epoch seconds."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
