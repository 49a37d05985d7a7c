"""
Billing models: Client, Item, Sale, SaleItem.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, SoftDeleteMixin, TenantMixin, UUIDPrimaryKeyMixin


class Client(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """Billable party (person or company) sales are issued to."""

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(20))
    address: Mapped[Optional[str]] = mapped_column(Text)
    company: Mapped[Optional[str]] = mapped_column(String(255))
    tax_id: Mapped[Optional[str]] = mapped_column(String(100))
    # "metadata" is reserved on declarative classes
    compliance_data: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    sales: Mapped[list["Sale"]] = relationship(back_populates="client")


class Item(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """Product or service that can be sold."""

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    sku: Mapped[Optional[str]] = mapped_column(String(100), unique=True)

    price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6))
    currency: Mapped[str] = mapped_column(String(3), default="COP")
    product_type: Mapped[str] = mapped_column(String(10), default="physical", nullable=False)

    type: Mapped[str] = mapped_column(String(10), nullable=False)  # product | service

    is_stock_tracked: Mapped[bool] = mapped_column(Boolean, default=True)
    stock: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6), default=0)
    duration: Mapped[Optional[int]] = mapped_column(Integer)  # minutes, services only
    category: Mapped[Optional[str]] = mapped_column(String(100))

    compliance_data: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    sale_items: Mapped[list["SaleItem"]] = relationship(back_populates="item")


class Sale(UUIDPrimaryKeyMixin, TenantMixin, AuditMixin, SoftDeleteMixin, Base):
    """Sale document issued to a client."""

    __tablename__ = "sales"

    sale_number: Mapped[Optional[str]] = mapped_column(String(100))
    jurisdiction_id: Mapped[str] = mapped_column(String(50), default="CO", nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="COP", nullable=False)

    sale_date: Mapped[date] = mapped_column(Date, nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    due_date: Mapped[Optional[date]] = mapped_column(Date)

    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)

    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)

    client_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("clients.id"), index=True)

    compliance_data: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    client: Mapped[Optional["Client"]] = relationship(back_populates="sales")
    sale_items: Mapped[list["SaleItem"]] = relationship(
        back_populates="sale", cascade="all, delete-orphan"
    )


class SaleItem(UUIDPrimaryKeyMixin, Base):
    """
    Line of a sale. Owned by its sale: no tenant column, no audit trail,
    no soft delete (removing a line deletes it).
    """

    __tablename__ = "sale_items"

    sale_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sales.id"), nullable=False, index=True
    )
    item_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("items.id"))

    # Snapshot of the item at time of sale (price, name, tax rules)
    product_snapshot: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    description: Mapped[Optional[str]] = mapped_column(Text)
    product_type: Mapped[str] = mapped_column(String(10), default="physical", nullable=False)

    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 6), default=1, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    sale: Mapped["Sale"] = relationship(back_populates="sale_items")
    item: Mapped[Optional["Item"]] = relationship(back_populates="sale_items")
