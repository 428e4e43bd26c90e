"""
Domain entities for symbol enrollments.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EnrollmentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True)
class Enrollment:
    """A symbol opted in to recommendations; symbol is normalized (BTC-USD)."""

    symbol: str
    enrolled_at: datetime
    status: EnrollmentStatus
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE


@dataclass(frozen=True)
class EnrollmentView:
    symbol: str
    currency: str
    enrolled_at: datetime
    status: EnrollmentStatus
    recommendation_available: bool
    recommendation_available_at: datetime
    days_until_recommendation: int
