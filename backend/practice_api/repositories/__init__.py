"""
Repository layer: tenant-scoped data access with a dynamic filter engine.

Usage:
    from practice_api.repositories import PatientFilter, get_patient_repository

    repo = get_patient_repository(db)
    page = repo.find_all(org_id, filter=PatientFilter(paginated=True, bloodType="O+"))
    patient = repo.find_one(patient_id, org_id, with_relations={"appointments": True})
"""

from .base import EntityRepository, Page
from .conditions import ConditionBuilder
from .filters import CommonFilter, build_filter
from .loading import build_loader_options
from .metadata import ColumnInfo, ColumnKind, TableMetadata
from .options import QueryOptions, build_query_options
from .query_params import parse_query_parameters
from .appointment import AppointmentFilter, AppointmentRepository, get_appointment_repository
from .client import ClientFilter, ClientRepository, get_client_repository
from .health_professional import (
    HealthProfessionalFilter,
    HealthProfessionalRepository,
    get_health_professional_repository,
)
from .item import ItemFilter, ItemRepository, get_item_repository
from .medical_record import (
    MedicalRecordFilter,
    MedicalRecordRepository,
    get_medical_record_repository,
)
from .patient import PatientFilter, PatientRepository, get_patient_repository
from .sale import SaleFilter, SaleRepository, get_sale_repository

__all__ = [
    # Core
    "EntityRepository",
    "Page",
    "ConditionBuilder",
    "CommonFilter",
    "build_filter",
    "build_loader_options",
    "ColumnInfo",
    "ColumnKind",
    "TableMetadata",
    "QueryOptions",
    "build_query_options",
    "parse_query_parameters",
    # Appointment
    "AppointmentFilter",
    "AppointmentRepository",
    "get_appointment_repository",
    # Client
    "ClientFilter",
    "ClientRepository",
    "get_client_repository",
    # Health professional
    "HealthProfessionalFilter",
    "HealthProfessionalRepository",
    "get_health_professional_repository",
    # Item
    "ItemFilter",
    "ItemRepository",
    "get_item_repository",
    # Medical record
    "MedicalRecordFilter",
    "MedicalRecordRepository",
    "get_medical_record_repository",
    # Patient
    "PatientFilter",
    "PatientRepository",
    "get_patient_repository",
    # Sale
    "SaleFilter",
    "SaleRepository",
    "get_sale_repository",
]
