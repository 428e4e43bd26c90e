"""
Router for symbol enrollment and BUY / SELL / HOLD recommendations.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from crypto_tracker.application.services.enrollment_service import EnrollmentService
from crypto_tracker.application.use_cases.get_recommendation import GetRecommendationUseCase
from crypto_tracker.infrastructure.entrypoints.dependencies import (
    get_enrollment_service,
    get_recommendation_use_case,
)
from crypto_tracker.infrastructure.entrypoints.schemas import (
    EnrollmentResponse,
    RecommendationResponse,
    SymbolActionResponse,
)

router = APIRouter(tags=["recommendations"])


@router.post(
    "/enroll/{symbol}",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def enroll_symbol(symbol: str, enrollments: EnrollmentService = Depends(get_enrollment_service)):
    return EnrollmentResponse.model_validate(enrollments.enroll_symbol(symbol))


@router.get("/enroll/{symbol}", response_model=EnrollmentResponse)
def get_enrollment_status(
    symbol: str, enrollments: EnrollmentService = Depends(get_enrollment_service)
):
    return EnrollmentResponse.model_validate(enrollments.get_enrollment_status(symbol))


@router.delete("/enroll/{symbol}", response_model=SymbolActionResponse)
def unenroll_symbol(symbol: str, enrollments: EnrollmentService = Depends(get_enrollment_service)):
    enrollments.unenroll_symbol(symbol)
    return SymbolActionResponse(
        message=f"Successfully unenrolled {symbol.upper()}",
        symbol=symbol.upper(),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/enroll", response_model=list[EnrollmentResponse])
def list_enrollments(enrollments: EnrollmentService = Depends(get_enrollment_service)):
    return [EnrollmentResponse.model_validate(view) for view in enrollments.list_enrollments()]


@router.get("/recommendation/{symbol}", response_model=RecommendationResponse)
def get_recommendation(
    symbol: str, use_case: GetRecommendationUseCase = Depends(get_recommendation_use_case)
):
    return RecommendationResponse.model_validate(use_case.execute(symbol))
