"""
Health Professional Repository - Data access for clinical staff.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from practice_api.models import HealthProfessional

from .base import EntityRepository
from .filters import CommonFilter


class HealthProfessionalFilter(CommonFilter):
    """Filters specific to health professionals."""

    type: str | None = None
    specialty: str | None = None
    is_available: bool | None = None
    is_active: bool | None = None
    license_number: str | None = None
    npi: str | None = None


class HealthProfessionalRepository(EntityRepository[HealthProfessional]):
    """Repository for HealthProfessional entities."""

    def __init__(self, session: Session, **kwargs):
        super().__init__(HealthProfessional, session, **kwargs)

    def find_available(self, tenant_id: str) -> list[HealthProfessional]:
        """Active professionals currently taking appointments."""
        return self._find_where(
            tenant_id,
            HealthProfessional.is_active.is_(True),
            HealthProfessional.is_available.is_(True),
        )

    def find_by_specialty(self, specialty: str, tenant_id: str) -> list[HealthProfessional]:
        return self._find_where(
            tenant_id,
            HealthProfessional.specialty == specialty,
            HealthProfessional.is_active.is_(True),
        )

    def find_by_license_number(self, license_number: str, tenant_id: str) -> HealthProfessional | None:
        if not license_number:
            return None
        rows = self._find_where(tenant_id, HealthProfessional.license_number == license_number)
        return rows[0] if rows else None

    def find_by_npi(self, npi: str, tenant_id: str) -> HealthProfessional | None:
        if not npi:
            return None
        rows = self._find_where(tenant_id, HealthProfessional.npi == npi)
        return rows[0] if rows else None

    def get_by_type(self, professional_type: str, tenant_id: str) -> list[HealthProfessional]:
        """Active professionals of one type (doctor, nurse, ...)."""
        return self._find_where(
            tenant_id,
            HealthProfessional.type == professional_type,
            HealthProfessional.is_active.is_(True),
        )

    def update_availability(
        self,
        entity_id: str,
        is_available: bool,
        tenant_id: str,
        user_id: str | None = None,
    ) -> HealthProfessional | None:
        return self.update(entity_id, {"is_available": is_available}, tenant_id, user_id)

    def get_statistics(self, tenant_id: str) -> dict[str, int]:
        """Counts of live professionals: total, active and available."""
        return {
            "total": self.count(tenant_id),
            "active": self.count(tenant_id, filter=HealthProfessionalFilter(is_active=True)),
            "available": self.count(
                tenant_id,
                filter=HealthProfessionalFilter(is_active=True, is_available=True),
            ),
        }


def get_health_professional_repository(db: Session) -> HealthProfessionalRepository:
    """Factory function for dependency injection."""
    return HealthProfessionalRepository(db)
