"""
Request payload schemas for the entity endpoints.

Fields use snake_case in Python and camelCase on the wire. Create schemas
never carry tenant, audit or soft-delete fields; those are set by the
repository. Update schemas have every field optional and are applied
with exclude_unset, so only fields sent by the client change.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

Sex = Literal["male", "female"]
BloodType = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]
ProfessionalType = Literal["doctor", "nurse", "specialist", "therapist", "technician", "administrator"]
AppointmentType = Literal["consultation", "follow_up", "emergency", "routine_checkup", "specialist_visit"]
AppointmentStatus = Literal["scheduled", "confirmed", "in_progress", "completed", "cancelled", "no_show"]
Priority = Literal["low", "normal", "high", "urgent"]
RecordType = Literal[
    "consultation", "examination", "lab_result", "imaging", "prescription", "procedure", "vaccination"
]
ItemKind = Literal["product", "service"]
ProductKind = Literal["physical", "digital", "service", "misc"]
SaleStatus = Literal["draft", "issued", "accepted", "cancelled", "completed"]


class Payload(BaseModel):
    """Base for request bodies: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_values(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, by attribute name."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# Patients
# =============================================================================


class PatientCreate(Payload):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: date
    sex: Sex
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    blood_type: BloodType | None = None
    allergies: str | None = None
    current_medications: str | None = None
    insurance_provider: str | None = None
    insurance_number: str | None = None
    user_id: str | None = None
    is_active: bool | None = None


class PatientUpdate(Payload):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    date_of_birth: date | None = None
    sex: Sex | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    blood_type: BloodType | None = None
    allergies: str | None = None
    current_medications: str | None = None
    insurance_provider: str | None = None
    insurance_number: str | None = None
    is_active: bool | None = None


# =============================================================================
# Health professionals
# =============================================================================


class HealthProfessionalCreate(Payload):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = None
    type: ProfessionalType
    specialty: str | None = None
    license_number: str | None = None
    npi: str | None = None
    bio: str | None = None
    education: str | None = None
    certifications: str | None = None
    languages: str | None = None
    user_id: str | None = None
    is_active: bool | None = None
    is_available: bool | None = None


class HealthProfessionalUpdate(Payload):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = None
    type: ProfessionalType | None = None
    specialty: str | None = None
    license_number: str | None = None
    npi: str | None = None
    bio: str | None = None
    education: str | None = None
    certifications: str | None = None
    languages: str | None = None
    is_active: bool | None = None
    is_available: bool | None = None


# =============================================================================
# Appointments
# =============================================================================


class AppointmentCreate(Payload):
    patient_id: str
    health_professional_id: str
    appointment_date: datetime
    duration: int = Field(gt=0)
    start_time: datetime
    end_time: datetime
    appointment_type: AppointmentType
    status: AppointmentStatus | None = None
    priority: Priority | None = None
    description: str | None = None
    notes: str | None = None
    symptoms: str | None = None
    room_number: str | None = None
    location: str | None = None


class AppointmentUpdate(Payload):
    patient_id: str | None = None
    health_professional_id: str | None = None
    appointment_date: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    start_time: datetime | None = None
    end_time: datetime | None = None
    appointment_type: AppointmentType | None = None
    status: AppointmentStatus | None = None
    priority: Priority | None = None
    description: str | None = None
    notes: str | None = None
    symptoms: str | None = None
    room_number: str | None = None
    location: str | None = None
    is_active: bool | None = None


# =============================================================================
# Medical records
# =============================================================================


class MedicalRecordCreate(Payload):
    patient_id: str
    appointment_id: str | None = None
    record_type: RecordType
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    blood_pressure: str | None = None
    heart_rate: int | None = None
    temperature: Decimal | None = None
    weight: Decimal | None = None
    height: Decimal | None = None
    oxygen_saturation: int | None = Field(default=None, ge=0, le=100)
    symptoms: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    medications: str | None = None
    dosage: str | None = None
    instructions: str | None = None
    lab_results: str | None = None
    imaging_results: str | None = None
    follow_up_required: bool | None = None
    follow_up_date: datetime | None = None
    follow_up_notes: str | None = None


class MedicalRecordUpdate(Payload):
    appointment_id: str | None = None
    record_type: RecordType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    blood_pressure: str | None = None
    heart_rate: int | None = None
    temperature: Decimal | None = None
    weight: Decimal | None = None
    height: Decimal | None = None
    oxygen_saturation: int | None = Field(default=None, ge=0, le=100)
    symptoms: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    medications: str | None = None
    dosage: str | None = None
    instructions: str | None = None
    lab_results: str | None = None
    imaging_results: str | None = None
    follow_up_required: bool | None = None
    follow_up_date: datetime | None = None
    follow_up_notes: str | None = None
    is_active: bool | None = None


# =============================================================================
# Clients
# =============================================================================


class ClientCreate(Payload):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    company: str | None = None
    tax_id: str | None = None
    compliance_data: dict[str, Any] | None = None
    is_active: bool | None = None


class ClientUpdate(Payload):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    company: str | None = None
    tax_id: str | None = None
    compliance_data: dict[str, Any] | None = None
    is_active: bool | None = None


# =============================================================================
# Items
# =============================================================================


class ItemCreate(Payload):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    sku: str | None = None
    type: ItemKind
    product_type: ProductKind | None = None
    price: Decimal = Field(ge=0)
    cost: Decimal | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    is_stock_tracked: bool | None = None
    stock: Decimal | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, gt=0)
    category: str | None = None
    compliance_data: dict[str, Any] | None = None
    is_active: bool | None = None


class ItemUpdate(Payload):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    sku: str | None = None
    type: ItemKind | None = None
    product_type: ProductKind | None = None
    price: Decimal | None = Field(default=None, ge=0)
    cost: Decimal | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    is_stock_tracked: bool | None = None
    stock: Decimal | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, gt=0)
    category: str | None = None
    compliance_data: dict[str, Any] | None = None
    is_active: bool | None = None


class StockUpdate(Payload):
    stock: Decimal = Field(ge=0)


# =============================================================================
# Sales
# =============================================================================


class SaleItemCreate(Payload):
    item_id: str | None = None
    product_snapshot: dict[str, Any] | None = None
    description: str | None = None
    product_type: ProductKind | None = None
    quantity: Decimal | None = Field(default=None, gt=0)
    unit_price: Decimal = Field(ge=0)
    total_price: Decimal = Field(ge=0)
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    total: Decimal | None = None


class SaleCreate(Payload):
    sale_number: str | None = None
    jurisdiction_id: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    sale_date: date
    issue_date: date | None = None
    due_date: date | None = None
    total_amount: Decimal = Field(ge=0)
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    total: Decimal | None = None
    status: SaleStatus | None = None
    client_id: str | None = None
    compliance_data: dict[str, Any] | None = None
    sale_items: list[SaleItemCreate] | None = None


class SaleUpdate(Payload):
    sale_number: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    sale_date: date | None = None
    issue_date: date | None = None
    due_date: date | None = None
    total_amount: Decimal | None = Field(default=None, ge=0)
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    total: Decimal | None = None
    status: SaleStatus | None = None
    client_id: str | None = None
    compliance_data: dict[str, Any] | None = None
    is_active: bool | None = None


class SaleStatusUpdate(Payload):
    status: SaleStatus
