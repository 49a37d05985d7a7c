"""
Sale Repository - Data access for sales and their lines.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from practice_api.models import Sale, SaleItem

from .base import EntityRepository
from .filters import CommonFilter
from .metadata import TableMetadata


class SaleFilter(CommonFilter):
    """Filters specific to sales."""

    consumed_fields: ClassVar[frozenset[str]] = frozenset({"amount_from", "amount_to"})

    client_id: str | None = None
    currency: str | None = None
    jurisdiction_id: str | None = None
    is_active: bool | None = None

    amount_from: Decimal | None = None
    amount_to: Decimal | None = None


class SaleRepository(EntityRepository[Sale]):
    """
    Repository for Sale entities.

    Sale lines (SaleItem) are owned by their sale: they carry no tenant
    column and are reached through the sale.
    """

    def __init__(self, session: Session, **kwargs):
        super().__init__(Sale, session, **kwargs)
        self._line_meta = TableMetadata.from_model(SaleItem)

    def _entity_conditions(self, filter: CommonFilter) -> list[ColumnElement[bool]]:
        if not isinstance(filter, SaleFilter):
            return []

        conditions: list[ColumnElement[bool]] = []
        if filter.amount_from is not None:
            conditions.append(Sale.total_amount >= filter.amount_from)
        if filter.amount_to is not None:
            conditions.append(Sale.total_amount <= filter.amount_to)
        return conditions

    def _new_line(self, data: Mapping[str, Any]) -> SaleItem:
        values: dict[str, Any] = {}
        for key, value in data.items():
            info = self._line_meta.resolve(key)
            if info is None or info.primary_key or info.attr == "sale_id":
                continue
            values[info.attr] = value
        if values.get("quantity") is None:
            values["quantity"] = 1
        if values.get("total") is None and values.get("total_price") is not None:
            values["total"] = values["total_price"]
        return SaleItem(**values)

    def create(
        self,
        data: Mapping[str, Any],
        tenant_id: str,
        user_id: str | None = None,
    ) -> Sale:
        """Insert a sale; a `sale_items` list is created with it."""
        values = dict(data)
        lines = values.pop("sale_items", None)
        if lines is not None:
            return self.create_with_items(values, lines, tenant_id, user_id)
        return super().create(values, tenant_id, user_id)

    def create_with_items(
        self,
        data: Mapping[str, Any],
        lines: Sequence[Mapping[str, Any]],
        tenant_id: str,
        user_id: str | None = None,
    ) -> Sale:
        """
        Insert a sale and its lines in a single commit.

        `total` defaults to `total_amount` on the sale, and to
        `total_price` on each line.
        """
        values = dict(data)
        if values.get("total") is None and values.get("total_amount") is not None:
            values["total"] = values["total_amount"]

        sale = self._new_entity(values, tenant_id, user_id)
        sale.sale_items = [self._new_line(line) for line in lines]
        return self._save_new(sale, tenant_id, user_id)

    def update_sale_status(
        self,
        sale_id: str,
        status: str,
        tenant_id: str,
        user_id: str | None = None,
    ) -> Sale | None:
        return self.update(sale_id, {"status": status}, tenant_id, user_id)

    def get_sale_items(self, sale_id: str, tenant_id: str | None = None) -> list[SaleItem]:
        """Lines of a sale, oldest first."""
        query = (
            select(SaleItem)
            .join(Sale, SaleItem.sale_id == Sale.id)
            .where(SaleItem.sale_id == sale_id)
            .order_by(SaleItem.created_at.asc())
        )
        if tenant_id is not None:
            query = query.where(Sale.organization_id == tenant_id)
        return list(self._session.scalars(query).all())

    def get_sales_by_item(self, item_id: str, tenant_id: str) -> list[Sale]:
        """Live sales with at least one line for the item."""
        return self._find_where(tenant_id, Sale.sale_items.any(SaleItem.item_id == item_id))


def get_sale_repository(db: Session) -> SaleRepository:
    """Factory function for dependency injection."""
    return SaleRepository(db)
