"""
Medical Record Repository - Data access for clinical notes.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from practice_api.models import MedicalRecord

from .base import EntityRepository
from .filters import CommonFilter


class MedicalRecordFilter(CommonFilter):
    """Filters specific to medical records."""

    patient_id: str | None = None
    appointment_id: str | None = None
    record_type: str | None = None
    follow_up_required: bool | None = None


class MedicalRecordRepository(EntityRepository[MedicalRecord]):
    """Repository for MedicalRecord entities."""

    def __init__(self, session: Session, **kwargs):
        super().__init__(MedicalRecord, session, **kwargs)

    def find_by_patient(
        self, patient_id: str, tenant_id: str, include_deleted: bool = False
    ) -> list[MedicalRecord]:
        return self._find_where(
            tenant_id,
            MedicalRecord.patient_id == patient_id,
            include_deleted=include_deleted,
            order_by=MedicalRecord.created_at.desc(),
        )

    def find_follow_up_required(
        self, tenant_id: str, include_deleted: bool = False
    ) -> list[MedicalRecord]:
        """Records flagged for follow-up, soonest first."""
        return self._find_where(
            tenant_id,
            MedicalRecord.follow_up_required.is_(True),
            include_deleted=include_deleted,
            order_by=MedicalRecord.follow_up_date,
        )


def get_medical_record_repository(db: Session) -> MedicalRecordRepository:
    """Factory function for dependency injection."""
    return MedicalRecordRepository(db)
