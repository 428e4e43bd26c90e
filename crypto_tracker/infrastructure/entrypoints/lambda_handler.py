"""
AWS Lambda entry points: cloud deployment.

api_handler          API Gateway (REST, proxy integration) requests for the
                     public subset of the API, routed by path suffix and method.
notification_handler Scheduled (EventBridge) price digest job.

Secrets are fetched from AWS Secrets Manager at cold start, before Settings
is imported, so credentials stored in the secret reach every adapter.

Deploy with handlers:
    crypto_tracker.infrastructure.entrypoints.lambda_handler.api_handler
    crypto_tracker.infrastructure.entrypoints.lambda_handler.notification_handler
"""

import base64
import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Any

# ---------------------------------------------------------------------------
# Secret bootstrap: must run before Settings reads the environment
# ---------------------------------------------------------------------------
_secret_arn = os.environ.get("SECRETS_ARN")
if _secret_arn:
    from crypto_tracker.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
    SecretsManagerAdapter().load_into_env(_secret_arn)

from pydantic import BaseModel  # noqa: E402

from crypto_tracker.core.config import settings  # noqa: E402
from crypto_tracker.core.logging import configure_logging  # noqa: E402
from crypto_tracker.domain.errors import TrackerError  # noqa: E402
from crypto_tracker.domain.ports.token_validator_port import ITokenValidator  # noqa: E402
from crypto_tracker.domain.symbols import mask_phone_number  # noqa: E402
from crypto_tracker.infrastructure.entrypoints.container import get_container  # noqa: E402
from crypto_tracker.infrastructure.entrypoints.dependencies import bearer_token  # noqa: E402
from crypto_tracker.infrastructure.entrypoints.schemas import (  # noqa: E402
    AuthRequest,
    AuthResponse,
    CoinInfoSchema,
    HealthResponse,
    PriceResponse,
    SubscribeRequest,
    SubscriptionResponse,
)

configure_logging(level=settings.log_level)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}
PRICE_PATH = re.compile(r".*/prices/([A-Z]+)$")
DEFAULT_COIN_LIMIT = 100


class BadRequest(Exception):
    """Request body or parameters could not be parsed."""


def api_handler(event: dict, context: Any = None) -> dict:
    path = event.get("path") or ""
    method = (event.get("httpMethod") or "").upper()
    logger.info("Received request: %s %s", method, path)

    try:
        return _dispatch(event, path, method)
    except BadRequest as exc:
        logger.warning("Invalid request body for %s %s: %s", method, path, exc)
        return _response(400, {"error": "Invalid request body", "message": str(exc)})
    except Exception as exc:
        logger.exception("Error processing %s %s", method, path)
        return _response(500, {"error": "Internal Server Error", "message": str(exc)})


def notification_handler(event: dict, context: Any = None) -> dict:
    """Run the digest job; failures propagate so the invocation is marked failed."""
    logger.info("Received scheduled event: %s", event.get("source", "manual"))
    report = get_container().notifications.send_price_notifications()
    return {
        "status": "success",
        "successCount": report.success_count,
        "failureCount": report.failure_count,
    }


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------


def _dispatch(event: dict, path: str, method: str) -> dict:
    if path.endswith("/health") and method == "GET":
        return _health()
    if path.endswith("/subscribe") and method == "POST":
        return _subscribe(_parse_body(event, SubscribeRequest))
    if path.endswith("/auth/signup") and method == "POST":
        return _sign_up(_parse_body(event, AuthRequest))
    if path.endswith("/auth/verify") and method == "POST":
        return _verify(_parse_body(event, AuthRequest))
    if path.endswith("/auth/signin") and method == "POST":
        return _sign_in(_parse_body(event, AuthRequest))
    if path.endswith("/auth/resend-code") and method == "POST":
        return _resend_code(_parse_body(event, AuthRequest))
    if path.endswith("/auth/complete-signup") and method == "POST":
        return _complete_signup(_parse_body(event, AuthRequest))
    if path.endswith("/coins/popular") and method == "GET":
        return _popular_coins(event)
    if path.endswith("/auth/coins") and method == "PUT":
        return _update_coins(event, _parse_body(event, AuthRequest))

    match = PRICE_PATH.match(path)
    if match and method == "GET":
        return _get_price(match.group(1))

    return _response(404, {"error": "Not Found", "path": path, "method": method})


def _health() -> dict:
    return _response(
        200,
        HealthResponse(
            status="UP",
            service=settings.service_name,
            timestamp=datetime.now(timezone.utc),
        ),
    )


def _subscribe(request: SubscribeRequest) -> dict:
    result = get_container().subscriptions.subscribe(request.phone_number, request.name)
    return _response(201, SubscriptionResponse.model_validate(result))


def _sign_up(request: AuthRequest) -> dict:
    logger.info("Sign up request for %s", mask_phone_number(request.phone_number))
    result = get_container().identity_provider.sign_up(
        request.phone_number, request.password, request.name
    )
    return _response(201 if result.success else 400, AuthResponse.model_validate(result))


def _verify(request: AuthRequest) -> dict:
    result = get_container().identity_provider.confirm_sign_up(
        request.phone_number, request.verification_code
    )
    return _response(200 if result.success else 400, AuthResponse.model_validate(result))


def _sign_in(request: AuthRequest) -> dict:
    logger.info("Sign in request for %s", mask_phone_number(request.phone_number))
    result = get_container().sign_in.execute(request.phone_number, request.password)
    return _response(200 if result.success else 401, AuthResponse.model_validate(result))


def _resend_code(request: AuthRequest) -> dict:
    result = get_container().identity_provider.resend_confirmation_code(request.phone_number)
    return _response(200 if result.success else 400, AuthResponse.model_validate(result))


def _complete_signup(request: AuthRequest) -> dict:
    result = get_container().subscriptions.subscribe_with_coins(
        request.phone_number,
        request.name,
        request.cognito_user_id or request.verification_code,
        request.selected_coins,
    )
    return _response(201, SubscriptionResponse.model_validate(result))


def _popular_coins(event: dict) -> dict:
    params = event.get("queryStringParameters") or {}
    try:
        limit = int(params.get("limit", DEFAULT_COIN_LIMIT))
    except (TypeError, ValueError) as exc:
        raise BadRequest(f"limit must be an integer: {params.get('limit')!r}") from exc

    try:
        coins = get_container().quote_provider.get_popular_coins(limit)
    except TrackerError as exc:
        logger.error("Failed to get popular coins: %s", exc.message)
        return _response(500, {"error": "Failed to get coins", "message": exc.message})
    return _response(200, [CoinInfoSchema.model_validate(coin) for coin in coins])


def _update_coins(event: dict, request: AuthRequest) -> dict:
    container = get_container()
    try:
        claims = container.token_validator.validate(bearer_token(_header(event, "Authorization")))
    except ValueError as exc:
        return _response(401, {"success": False, "message": str(exc)})
    if ITokenValidator.username(claims) != request.phone_number:
        return _response(403, {"success": False, "message": "Token does not belong to this phone number."})

    result = container.update_selected_coins.execute(
        request.phone_number, request.selected_coins or []
    )
    return _response(200 if result.success else 404, AuthResponse.model_validate(result))


def _get_price(symbol: str) -> dict:
    try:
        quote = get_container().quote_provider.get_all_prices(symbol)
    except TrackerError as exc:
        logger.error("Failed to get price for %s: %s", symbol, exc.message)
        return _response(
            500, {"error": "Failed to get price", "symbol": symbol, "message": exc.message}
        )
    return _response(200, PriceResponse.model_validate(quote))


# ---------------------------------------------------------------------------
# Event helpers
# ---------------------------------------------------------------------------


def _parse_body(event: dict, model: type[BaseModel]) -> Any:
    raw = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        return model.model_validate(json.loads(raw))
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc


def _header(event: dict, name: str) -> str:
    headers = event.get("headers") or {}
    wanted = name.lower()
    return next((value for key, value in headers.items() if key.lower() == wanted), "")


def _response(status_code: int, body: Any) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(_to_json(body)),
    }


def _to_json(body: Any) -> Any:
    """Serialize response models camelCase, dropping null fields."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(body, list):
        return [_to_json(item) for item in body]
    return body
