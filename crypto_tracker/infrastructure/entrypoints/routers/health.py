"""
Health check router for liveness probes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from crypto_tracker.core.config import settings
from crypto_tracker.infrastructure.entrypoints.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
def health_check() -> HealthResponse:
    return HealthResponse(
        status="UP",
        service=settings.service_name,
        timestamp=datetime.now(timezone.utc),
    )
