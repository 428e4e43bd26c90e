"""
Router for account sign-up, sign-in and coin selection.

Identity failures are not exceptions: the provider returns an AuthResult and
the route picks the status code from its success flag.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.application.use_cases.sign_in import SignInUseCase
from crypto_tracker.application.use_cases.update_selected_coins import UpdateSelectedCoinsUseCase
from crypto_tracker.domain.ports.identity_port import IIdentityProvider
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.ports.token_validator_port import ITokenValidator
from crypto_tracker.domain.symbols import mask_phone_number
from crypto_tracker.infrastructure.entrypoints.dependencies import (
    get_current_user,
    get_identity_provider,
    get_quote_provider,
    get_sign_in_use_case,
    get_subscription_service,
    get_update_coins_use_case,
)
from crypto_tracker.infrastructure.entrypoints.schemas import (
    AuthRequest,
    AuthResponse,
    CoinInfoSchema,
    SubscriptionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    body: AuthRequest,
    response: Response,
    identity: IIdentityProvider = Depends(get_identity_provider),
) -> AuthResponse:
    logger.info("Sign up request for %s", mask_phone_number(body.phone_number))
    result = identity.sign_up(body.phone_number, body.password, body.name)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return AuthResponse.model_validate(result)


@router.post("/verify", response_model=AuthResponse)
def verify_phone(
    body: AuthRequest,
    response: Response,
    identity: IIdentityProvider = Depends(get_identity_provider),
) -> AuthResponse:
    logger.info("Verify request for %s", mask_phone_number(body.phone_number))
    result = identity.confirm_sign_up(body.phone_number, body.verification_code)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return AuthResponse.model_validate(result)


@router.post("/signin", response_model=AuthResponse)
def sign_in(
    body: AuthRequest,
    response: Response,
    use_case: SignInUseCase = Depends(get_sign_in_use_case),
) -> AuthResponse:
    logger.info("Sign in request for %s", mask_phone_number(body.phone_number))
    result = use_case.execute(body.phone_number, body.password)
    if not result.success:
        response.status_code = status.HTTP_401_UNAUTHORIZED
    return AuthResponse.model_validate(result)


@router.post("/resend-code", response_model=AuthResponse)
def resend_code(
    body: AuthRequest,
    response: Response,
    identity: IIdentityProvider = Depends(get_identity_provider),
) -> AuthResponse:
    logger.info("Resend code request for %s", mask_phone_number(body.phone_number))
    result = identity.resend_confirmation_code(body.phone_number)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return AuthResponse.model_validate(result)


@router.post(
    "/complete-signup",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
def complete_signup(
    body: AuthRequest,
    subscriptions: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    logger.info(
        "Complete signup for %s with %d coins",
        mask_phone_number(body.phone_number), len(body.selected_coins or []),
    )
    result = subscriptions.subscribe_with_coins(
        body.phone_number,
        body.name,
        body.cognito_user_id or body.verification_code,
        body.selected_coins,
    )
    return SubscriptionResponse.model_validate(result)


@router.get("/coins/popular", response_model=list[CoinInfoSchema])
def popular_coins(
    limit: int = Query(default=100, ge=1, le=1000),
    provider: IPriceQuoteProvider = Depends(get_quote_provider),
) -> list[CoinInfoSchema]:
    logger.info("Fetching popular coins, limit %d", limit)
    return [CoinInfoSchema.model_validate(coin) for coin in provider.get_popular_coins(limit)]


@router.put("/coins", response_model=AuthResponse)
def update_coins(
    body: AuthRequest,
    response: Response,
    user: dict = Depends(get_current_user),
    use_case: UpdateSelectedCoinsUseCase = Depends(get_update_coins_use_case),
) -> AuthResponse:
    if ITokenValidator.username(user) != body.phone_number:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token does not belong to this phone number.",
        )

    logger.info("Update coins request for %s", mask_phone_number(body.phone_number))
    result = use_case.execute(body.phone_number, body.selected_coins or [])
    if not result.success:
        response.status_code = status.HTTP_404_NOT_FOUND
    return AuthResponse.model_validate(result)
