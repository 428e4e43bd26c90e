"""
Infrastructure adapter: DynamoDB (PynamoDB) → IEnrollmentRepository.
"""

from typing import Optional

from crypto_tracker.domain.entities.enrollment import Enrollment, EnrollmentStatus
from crypto_tracker.domain.ports.enrollment_repository_port import IEnrollmentRepository
from crypto_tracker.infrastructure.persistence.dynamodb_models import SymbolEnrollmentModel


class DynamoDBEnrollmentRepository(IEnrollmentRepository):
    def __init__(self, model: type[SymbolEnrollmentModel] = SymbolEnrollmentModel) -> None:
        self._model = model

    def get(self, symbol: str) -> Optional[Enrollment]:
        try:
            item = self._model.get(symbol)
        except self._model.DoesNotExist:
            return None
        return self._to_entity(item)

    def save(self, enrollment: Enrollment) -> None:
        self._model(
            symbol=enrollment.symbol,
            enrolled_at=enrollment.enrolled_at,
            status=enrollment.status.value,
            updated_at=enrollment.updated_at,
        ).save()

    def list_all(self) -> list[Enrollment]:
        return [self._to_entity(item) for item in self._model.scan()]

    @staticmethod
    def _to_entity(item: SymbolEnrollmentModel) -> Enrollment:
        return Enrollment(
            symbol=item.symbol,
            enrolled_at=item.enrolled_at,
            status=EnrollmentStatus(item.status),
            updated_at=item.updated_at,
        )
