"""
FastAPI dependency functions.

Each one hands a route its collaborator from the process-wide Container;
tests replace them through app.dependency_overrides.
"""

from fastapi import Depends, HTTPException, Request

from crypto_tracker.application.services.enrollment_service import EnrollmentService
from crypto_tracker.application.services.price_tracker import PriceTrackingService
from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.application.use_cases.get_price import GetPriceUseCase
from crypto_tracker.application.use_cases.get_recommendation import GetRecommendationUseCase
from crypto_tracker.application.use_cases.sign_in import SignInUseCase
from crypto_tracker.application.use_cases.update_selected_coins import UpdateSelectedCoinsUseCase
from crypto_tracker.domain.ports.identity_port import IIdentityProvider
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.ports.token_validator_port import ITokenValidator
from crypto_tracker.infrastructure.entrypoints.container import get_container


def get_quote_provider() -> IPriceQuoteProvider:
    return get_container().quote_provider


def get_identity_provider() -> IIdentityProvider:
    return get_container().identity_provider


def get_token_validator() -> ITokenValidator:
    return get_container().token_validator


def get_price_tracker() -> PriceTrackingService:
    return get_container().price_tracker


def get_enrollment_service() -> EnrollmentService:
    return get_container().enrollments


def get_subscription_service() -> SubscriptionService:
    return get_container().subscriptions


def get_price_use_case() -> GetPriceUseCase:
    return get_container().get_price


def get_recommendation_use_case() -> GetRecommendationUseCase:
    return get_container().get_recommendation


def get_sign_in_use_case() -> SignInUseCase:
    return get_container().sign_in


def get_update_coins_use_case() -> UpdateSelectedCoinsUseCase:
    return get_container().update_selected_coins


def bearer_token(authorization: str) -> str:
    """Extract the token from an "Authorization: Bearer <token>" header value.

    Raises:
        ValueError: when the header is missing or not a Bearer credential.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise ValueError("Missing or invalid Authorization header.")
    return authorization.split(" ", 1)[1]


async def get_current_user(
    request: Request,
    validator: ITokenValidator = Depends(get_token_validator),
) -> dict:
    """FastAPI dependency: validate the Cognito JWT from the Authorization header."""
    try:
        token = bearer_token(request.headers.get("Authorization", ""))
        return validator.validate(token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
