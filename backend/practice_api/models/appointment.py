"""
HealthProfessional and Appointment models.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, SoftDeleteMixin, TenantMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .patient import MedicalRecord, Patient


class HealthProfessional(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """Doctor, nurse, therapist or other staff who sees patients."""

    __tablename__ = "health_professionals"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), unique=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(20))

    # Professional information
    type: Mapped[str] = mapped_column(String(30), nullable=False)  # doctor | nurse | ...
    specialty: Mapped[Optional[str]] = mapped_column(String(50))
    license_number: Mapped[Optional[str]] = mapped_column(String(50))
    npi: Mapped[Optional[str]] = mapped_column(String(20))  # National Provider Identifier

    bio: Mapped[Optional[str]] = mapped_column(Text)
    education: Mapped[Optional[str]] = mapped_column(Text)
    certifications: Mapped[Optional[str]] = mapped_column(Text)
    languages: Mapped[Optional[str]] = mapped_column(Text)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)

    appointments: Mapped[list["Appointment"]] = relationship(back_populates="health_professional")


class Appointment(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """A scheduled visit of a patient with a health professional."""

    __tablename__ = "appointments"

    patient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("patients.id"), nullable=False, index=True
    )
    health_professional_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("health_professionals.id"), nullable=False, index=True
    )

    # Scheduling
    appointment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    appointment_type: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="scheduled", nullable=False)
    priority: Mapped[str] = mapped_column(String(10), default="normal", nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    symptoms: Mapped[Optional[str]] = mapped_column(Text)

    room_number: Mapped[Optional[str]] = mapped_column(String(20))
    location: Mapped[Optional[str]] = mapped_column(String(200))

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    patient: Mapped["Patient"] = relationship(back_populates="appointments")
    health_professional: Mapped["HealthProfessional"] = relationship(back_populates="appointments")
    medical_records: Mapped[list["MedicalRecord"]] = relationship(back_populates="appointment")
