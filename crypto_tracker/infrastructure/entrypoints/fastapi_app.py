"""
FastAPI entry point: the REST API server.

Creates the FastAPI application and wires together the routers, the
centralized error handlers and logging. Services come from the shared
Container (see container.py) through the dependency functions.

Run locally:
    uvicorn crypto_tracker.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from crypto_tracker.core.config import settings  # noqa: E402
from crypto_tracker.core.logging import configure_logging  # noqa: E402
from crypto_tracker.infrastructure.entrypoints.error_handlers import register_error_handlers  # noqa: E402
from crypto_tracker.infrastructure.entrypoints.routers import (  # noqa: E402
    auth,
    health,
    prices,
    recommendations,
    subscriptions,
)

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(level=settings.log_level)

    app = FastAPI(title="Coinbase Price Tracker API", version=settings.version)

    register_error_handlers(app)

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(subscriptions.router, prefix=API_PREFIX)
    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(prices.router, prefix=API_PREFIX)
    app.include_router(recommendations.router, prefix=API_PREFIX)

    return app


app = create_app()
