"""
Patient and MedicalRecord models.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, SoftDeleteMixin, TenantMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .appointment import Appointment


class Patient(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """A person receiving care at the practice."""

    __tablename__ = "patients"

    # Linked login account, if the patient has one
    user_id: Mapped[Optional[str]] = mapped_column(String(36), unique=True)

    # Personal information
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    sex: Mapped[str] = mapped_column(String(10), nullable=False)  # male | female
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(20))

    # Address
    address: Mapped[Optional[str]] = mapped_column(Text)
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(100))
    zip_code: Mapped[Optional[str]] = mapped_column(String(20))
    country: Mapped[Optional[str]] = mapped_column(String(100))

    # Emergency contact
    emergency_contact_name: Mapped[Optional[str]] = mapped_column(String(200))
    emergency_contact_phone: Mapped[Optional[str]] = mapped_column(String(20))
    emergency_contact_relationship: Mapped[Optional[str]] = mapped_column(String(100))

    # Medical information
    blood_type: Mapped[Optional[str]] = mapped_column(String(3))
    allergies: Mapped[Optional[str]] = mapped_column(Text)
    current_medications: Mapped[Optional[str]] = mapped_column(Text)
    insurance_provider: Mapped[Optional[str]] = mapped_column(String(200))
    insurance_number: Mapped[Optional[str]] = mapped_column(String(100))

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    appointments: Mapped[list["Appointment"]] = relationship(back_populates="patient")
    medical_records: Mapped[list["MedicalRecord"]] = relationship(back_populates="patient")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class MedicalRecord(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """Clinical note attached to a patient and optionally to an appointment."""

    __tablename__ = "medical_records"

    patient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("patients.id"), nullable=False, index=True
    )
    appointment_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("appointments.id"), index=True
    )

    record_type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Vital signs
    blood_pressure: Mapped[Optional[str]] = mapped_column(String(20))  # "120/80"
    heart_rate: Mapped[Optional[int]] = mapped_column(Integer)  # bpm
    temperature: Mapped[Optional[Decimal]] = mapped_column(Numeric(4, 1))  # Celsius
    weight: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))  # kg
    height: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))  # cm
    oxygen_saturation: Mapped[Optional[int]] = mapped_column(Integer)  # percent

    # Clinical details
    symptoms: Mapped[Optional[str]] = mapped_column(Text)
    diagnosis: Mapped[Optional[str]] = mapped_column(Text)
    treatment: Mapped[Optional[str]] = mapped_column(Text)
    medications: Mapped[Optional[str]] = mapped_column(Text)
    dosage: Mapped[Optional[str]] = mapped_column(Text)
    instructions: Mapped[Optional[str]] = mapped_column(Text)
    lab_results: Mapped[Optional[str]] = mapped_column(Text)
    imaging_results: Mapped[Optional[str]] = mapped_column(Text)

    # Follow-up
    follow_up_required: Mapped[bool] = mapped_column(Boolean, default=False)
    follow_up_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    follow_up_notes: Mapped[Optional[str]] = mapped_column(Text)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    patient: Mapped["Patient"] = relationship(back_populates="medical_records")
    appointment: Mapped[Optional["Appointment"]] = relationship(back_populates="medical_records")
