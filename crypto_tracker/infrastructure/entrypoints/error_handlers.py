"""
Centralized error handlers for FastAPI.

Maps domain errors to HTTP responses. Every error body carries "error",
"status" and "timestamp"; some add context fields. No stack traces or
internal details are exposed to clients.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from crypto_tracker.domain.errors import (
    ExchangeApiError,
    InvalidSymbolError,
    RecommendationNotAvailableError,
    SubscriptionStoreError,
    SymbolNotEnrolledError,
    TrackerError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500

EXCHANGE_ERROR_MESSAGES = {
    404: "Symbol not found or not supported by Coinbase",
    429: "Rate limit exceeded. Please try again later",
    503: "Coinbase API is temporarily unavailable",
}
EXCHANGE_DEFAULT_MESSAGE = "Error communicating with Coinbase API"


def error_body(status_code: int, error: str, **extra: Any) -> dict:
    """Build a consistent JSON error body."""
    return {
        "error": error,
        **extra,
        "status": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def exchange_error_message(status_code: int) -> str:
    return EXCHANGE_ERROR_MESSAGES.get(status_code, EXCHANGE_DEFAULT_MESSAGE)


def _error_response(
    status_code: int, error: str, headers: dict | None = None, **extra: Any
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, error, **extra),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        logger.warning("HTTP %d: %s", exc.status_code, exc.detail)
        return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = {
            ".".join(str(part) for part in error["loc"][1:]): error["msg"]
            for error in exc.errors()
        }
        logger.warning("Request validation failed: %s", list(fields))
        return _error_response(HTTP_400, "Validation failed", errors=fields)

    @app.exception_handler(InvalidSymbolError)
    async def handle_invalid_symbol(_request: Request, exc: InvalidSymbolError) -> JSONResponse:
        logger.warning("Invalid symbol: %r", exc.symbol)
        return _error_response(HTTP_400, exc.message)

    @app.exception_handler(SymbolNotEnrolledError)
    async def handle_not_enrolled(_request: Request, exc: SymbolNotEnrolledError) -> JSONResponse:
        logger.warning("Symbol not enrolled: %s", exc.symbol)
        return _error_response(
            HTTP_404,
            exc.message,
            symbol=exc.symbol,
            action=f"Enroll using POST /api/v1/enroll/{exc.symbol}",
        )

    @app.exception_handler(RecommendationNotAvailableError)
    async def handle_not_available(
        _request: Request, exc: RecommendationNotAvailableError
    ) -> JSONResponse:
        logger.info(
            "Recommendation not yet available for %s: %d days remaining",
            exc.symbol, exc.days_remaining,
        )
        return _error_response(
            HTTP_400,
            "Recommendation not yet available",
            symbol=exc.symbol,
            availableAt=exc.available_at.isoformat(),
            daysRemaining=exc.days_remaining,
        )

    @app.exception_handler(ExchangeApiError)
    async def handle_exchange(_request: Request, exc: ExchangeApiError) -> JSONResponse:
        logger.error("Coinbase API error: %d - %s", exc.status_code, exc.detail)
        return _error_response(exc.status_code, exchange_error_message(exc.status_code))

    @app.exception_handler(SubscriptionStoreError)
    async def handle_store(_request: Request, exc: SubscriptionStoreError) -> JSONResponse:
        logger.error("Subscription store error: %s", exc.reason)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(TrackerError)
    async def handle_tracker(_request: Request, exc: TrackerError) -> JSONResponse:
        """Catch-all for unhandled domain errors."""
        logger.error("Unhandled domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
