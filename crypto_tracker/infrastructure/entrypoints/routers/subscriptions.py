"""
Router for anonymous digest subscriptions.
"""

import logging

from fastapi import APIRouter, Depends, status

from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.domain.symbols import mask_phone_number
from crypto_tracker.infrastructure.entrypoints.dependencies import get_subscription_service
from crypto_tracker.infrastructure.entrypoints.schemas import SubscribeRequest, SubscriptionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscriptions"])


@router.post(
    "/subscribe",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe a phone number to the WhatsApp price digest",
)
def subscribe(
    body: SubscribeRequest,
    subscriptions: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    logger.info("Subscribe request for %s", mask_phone_number(body.phone_number))
    result = subscriptions.subscribe(body.phone_number, body.name)
    return SubscriptionResponse.model_validate(result)
