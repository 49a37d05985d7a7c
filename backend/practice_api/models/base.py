"""
Base class and mixins for all SQLAlchemy ORM models.

Mixins are capabilities: the generic repository looks at which of them a
model carries (through TableMetadata) to decide tenant scoping, audit
stamping and soft delete.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def new_uuid() -> str:
    """Primary key generator (UUID4 as text, portable across backends)."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class UUIDPrimaryKeyMixin:
    """String UUID primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)


class TenantMixin:
    """Owning organization. Every tenant-scoped row belongs to exactly one."""

    @declared_attr
    def organization_id(cls) -> Mapped[str]:
        return mapped_column(
            String(36), ForeignKey("organizations.id"), nullable=False, index=True
        )


class AuditMixin:
    """
    Audit trail fields.

    Fields added:
    - created_at, updated_at: timestamps
    - created_by, updated_by: acting user ids
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class SoftDeleteMixin:
    """
    Soft delete fields. A row with deleted_at set is hidden from reads
    unless deleted rows are explicitly requested.
    """

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    deleted_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        state = "deleted" if self.deleted_at is not None else "active"
        return f"<{class_name}(id={id_val}, {state})>"
