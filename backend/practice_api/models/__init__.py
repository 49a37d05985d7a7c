"""
SQLAlchemy ORM Models Package.

- base: Base class and capability mixins (tenant, audit, soft delete)
- organization: Organization (tenant)
- patient: Patient, MedicalRecord
- appointment: HealthProfessional, Appointment
- billing: Client, Item, Sale, SaleItem
"""

from .base import (
    Base,
    AuditMixin,
    SoftDeleteMixin,
    TenantMixin,
    UUIDPrimaryKeyMixin,
    new_uuid,
)
from .organization import Organization
from .patient import Patient, MedicalRecord
from .appointment import HealthProfessional, Appointment
from .billing import Client, Item, Sale, SaleItem

__all__ = [
    # Base
    "Base",
    "AuditMixin",
    "SoftDeleteMixin",
    "TenantMixin",
    "UUIDPrimaryKeyMixin",
    "new_uuid",
    # Tenant
    "Organization",
    # Clinical
    "Patient",
    "MedicalRecord",
    "HealthProfessional",
    "Appointment",
    # Billing
    "Client",
    "Item",
    "Sale",
    "SaleItem",
]
