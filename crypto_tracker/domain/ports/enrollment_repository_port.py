"""
Port (interface) for enrollment persistence.
Infrastructure adapters (e.g. DynamoDBEnrollmentRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from crypto_tracker.domain.entities.enrollment import Enrollment


class IEnrollmentRepository(ABC):
    @abstractmethod
    def get(self, symbol: str) -> Optional[Enrollment]:
        """Return the enrollment for a normalized symbol, or None."""
        ...

    @abstractmethod
    def save(self, enrollment: Enrollment) -> None: ...

    @abstractmethod
    def list_all(self) -> list[Enrollment]: ...
