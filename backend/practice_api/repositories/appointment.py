"""
Appointment Repository - Data access for appointments.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from practice_api.models import Appointment
from practice_common.config.constants import AppointmentStatus

from .base import EntityRepository
from .filters import CommonFilter


class AppointmentFilter(CommonFilter):
    """Filters specific to appointments."""

    consumed_fields: ClassVar[frozenset[str]] = frozenset(
        {"appointment_date_from", "appointment_date_to"}
    )

    appointment_type: str | None = None
    priority: str | None = None
    patient_id: str | None = None
    health_professional_id: str | None = None
    room_number: str | None = None
    location: str | None = None

    appointment_date_from: datetime | None = None
    appointment_date_to: datetime | None = None


class AppointmentRepository(EntityRepository[Appointment]):
    """Repository for Appointment entities."""

    def __init__(self, session: Session, **kwargs):
        super().__init__(Appointment, session, **kwargs)

    def _entity_conditions(self, filter: CommonFilter) -> list[ColumnElement[bool]]:
        if not isinstance(filter, AppointmentFilter):
            return []

        conditions: list[ColumnElement[bool]] = []
        if filter.appointment_date_from is not None:
            conditions.append(Appointment.appointment_date >= filter.appointment_date_from)
        if filter.appointment_date_to is not None:
            conditions.append(Appointment.appointment_date <= filter.appointment_date_to)
        return conditions

    def find_by_patient(
        self, patient_id: str, tenant_id: str, include_deleted: bool = False
    ) -> list[Appointment]:
        return self._find_where(
            tenant_id,
            Appointment.patient_id == patient_id,
            include_deleted=include_deleted,
            order_by=Appointment.appointment_date,
        )

    def find_by_health_professional(
        self, health_professional_id: str, tenant_id: str, include_deleted: bool = False
    ) -> list[Appointment]:
        return self._find_where(
            tenant_id,
            Appointment.health_professional_id == health_professional_id,
            include_deleted=include_deleted,
            order_by=Appointment.appointment_date,
        )

    def find_by_date_range(
        self, start: datetime, end: datetime, tenant_id: str, include_deleted: bool = False
    ) -> list[Appointment]:
        """Appointments scheduled between start and end, inclusive."""
        return self._find_where(
            tenant_id,
            Appointment.appointment_date >= start,
            Appointment.appointment_date <= end,
            include_deleted=include_deleted,
            order_by=Appointment.appointment_date,
        )

    def get_statistics(self, tenant_id: str) -> dict[str, int]:
        """Counts of live appointments overall and by status."""
        stats = {"total": self.count(tenant_id)}
        for status in (
            AppointmentStatus.SCHEDULED,
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
        ):
            stats[status] = self.count(tenant_id, filter=AppointmentFilter(status=status))
        return stats


def get_appointment_repository(db: Session) -> AppointmentRepository:
    """Factory function for dependency injection."""
    return AppointmentRepository(db)
