"""
Application service: symbol enrollment and the recommendation waiting period.

A symbol becomes eligible for recommendations minimum_days after it was
enrolled. Days remaining are rounded up, so a symbol enrolled 6.5 days ago
with a 7 day minimum still has 1 day to wait.
"""

import logging
import math
from datetime import datetime, timedelta

from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.enrollment import Enrollment, EnrollmentStatus, EnrollmentView
from crypto_tracker.domain.errors import SymbolNotEnrolledError
from crypto_tracker.domain.ports.enrollment_repository_port import IEnrollmentRepository
from crypto_tracker.domain.symbols import normalize_symbol, split_symbol

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400


class EnrollmentService:
    def __init__(
        self,
        repository: IEnrollmentRepository,
        minimum_days: int = 7,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._minimum_days = minimum_days
        self._clock = clock

    def enroll_symbol(self, symbol: str) -> EnrollmentView:
        """Enroll *symbol*.

        An ACTIVE enrollment is returned unchanged; an INACTIVE one is
        re-activated with a fresh waiting period.
        """
        normalized = normalize_symbol(symbol)
        existing = self._repository.get(normalized)
        if existing is not None and existing.is_active:
            logger.info("Symbol %s already enrolled", normalized)
            return self._to_view(existing)

        now = self._clock()
        enrollment = Enrollment(
            symbol=normalized,
            enrolled_at=now,
            status=EnrollmentStatus.ACTIVE,
            updated_at=now,
        )
        self._repository.save(enrollment)
        logger.info("Enrolled symbol %s", normalized)
        return self._to_view(enrollment)

    def get_enrollment_status(self, symbol: str) -> EnrollmentView:
        """Raises SymbolNotEnrolledError when no enrollment exists."""
        return self._to_view(self._require(symbol))

    def is_enrolled(self, symbol: str) -> bool:
        enrollment = self._repository.get(normalize_symbol(symbol))
        return enrollment is not None and enrollment.is_active

    def is_recommendation_available(self, symbol: str) -> bool:
        return self._days_remaining(self._require(symbol)) == 0

    def get_recommendation_available_date(self, symbol: str) -> datetime:
        return self._available_at(self._require(symbol))

    def get_days_until_recommendation(self, symbol: str) -> int:
        return self._days_remaining(self._require(symbol))

    def unenroll_symbol(self, symbol: str) -> str:
        """Mark *symbol* inactive. Returns the normalized symbol."""
        enrollment = self._require(symbol)
        self._repository.save(
            Enrollment(
                symbol=enrollment.symbol,
                enrolled_at=enrollment.enrolled_at,
                status=EnrollmentStatus.INACTIVE,
                updated_at=self._clock(),
            )
        )
        logger.info("Unenrolled symbol %s", enrollment.symbol)
        return enrollment.symbol

    def list_enrollments(self) -> list[EnrollmentView]:
        return [
            self._to_view(enrollment)
            for enrollment in self._repository.list_all()
            if enrollment.is_active
        ]

    def _require(self, symbol: str) -> Enrollment:
        enrollment = self._repository.get(normalize_symbol(symbol))
        if enrollment is None:
            raise SymbolNotEnrolledError(symbol.strip().upper())
        return enrollment

    def _available_at(self, enrollment: Enrollment) -> datetime:
        return enrollment.enrolled_at + timedelta(days=self._minimum_days)

    def _days_remaining(self, enrollment: Enrollment) -> int:
        remaining = (self._available_at(enrollment) - self._clock()).total_seconds()
        if remaining <= 0:
            return 0
        return math.ceil(remaining / _SECONDS_PER_DAY)

    def _to_view(self, enrollment: Enrollment) -> EnrollmentView:
        base, currency = split_symbol(enrollment.symbol)
        days_remaining = self._days_remaining(enrollment)
        return EnrollmentView(
            symbol=base,
            currency=currency,
            enrolled_at=enrollment.enrolled_at,
            status=enrollment.status,
            recommendation_available=days_remaining == 0,
            recommendation_available_at=self._available_at(enrollment),
            days_until_recommendation=days_remaining,
        )
