"""
Patient Repository - Data access for patients.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from practice_api.models import Patient

from .base import EntityRepository
from .conditions import normalize_search_term
from .filters import CommonFilter


class PatientFilter(CommonFilter):
    """Filters specific to patients."""

    consumed_fields: ClassVar[frozenset[str]] = frozenset(
        {"age_from", "age_to", "date_of_birth_from", "date_of_birth_to"}
    )

    sex: str | None = None
    blood_type: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool | None = None

    age_from: int | None = None
    age_to: int | None = None
    date_of_birth_from: date | None = None
    date_of_birth_to: date | None = None


def years_before(day: date, years: int) -> date:
    """Same calendar day `years` earlier (Feb 29 falls back to Feb 28)."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


class PatientRepository(EntityRepository[Patient]):
    """Repository for Patient entities."""

    def __init__(self, session: Session, **kwargs):
        super().__init__(Patient, session, **kwargs)

    def _entity_conditions(self, filter: CommonFilter) -> list[ColumnElement[bool]]:
        if not isinstance(filter, PatientFilter):
            return []

        conditions: list[ColumnElement[bool]] = []
        today = self._clock().date()

        # Age N means born at most N years ago and more than N+1 years ago
        if filter.age_from is not None:
            conditions.append(Patient.date_of_birth <= years_before(today, filter.age_from))
        if filter.age_to is not None:
            conditions.append(Patient.date_of_birth > years_before(today, filter.age_to + 1))

        if filter.date_of_birth_from is not None:
            conditions.append(Patient.date_of_birth >= filter.date_of_birth_from)
        if filter.date_of_birth_to is not None:
            conditions.append(Patient.date_of_birth <= filter.date_of_birth_to)

        return conditions

    def find_by_email(
        self, email: str, tenant_id: str, include_deleted: bool = False
    ) -> Patient | None:
        """First patient with this exact email."""
        rows = self._find_where(
            tenant_id, Patient.email == email, include_deleted=include_deleted
        )
        return rows[0] if rows else None

    def search_patients(
        self, term: str, tenant_id: str, include_deleted: bool = False
    ) -> list[Patient]:
        """Partial match on name, email or phone."""
        term = normalize_search_term(term)
        if term is None:
            return []
        return self._find_where(
            tenant_id,
            or_(
                Patient.first_name.contains(term, autoescape=True),
                Patient.last_name.contains(term, autoescape=True),
                Patient.email.contains(term, autoescape=True),
                Patient.phone.contains(term, autoescape=True),
            ),
            include_deleted=include_deleted,
        )

    def find_by_blood_type(
        self, blood_type: str, tenant_id: str, include_deleted: bool = False
    ) -> list[Patient]:
        return self._find_where(
            tenant_id, Patient.blood_type == blood_type, include_deleted=include_deleted
        )

    def get_statistics(self, tenant_id: str) -> dict[str, int]:
        """Counts of live patients: total, active and inactive."""
        total = self.count(tenant_id)
        active = self.count(tenant_id, filter=PatientFilter(is_active=True))
        return {"total": total, "active": active, "inactive": total - active}


def get_patient_repository(db: Session) -> PatientRepository:
    """Factory function for dependency injection."""
    return PatientRepository(db)
