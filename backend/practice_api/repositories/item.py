"""
Item Repository - Data access for products and services.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, Mapping

from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from practice_api.models import Item
from practice_common.config.constants import ItemType, Limits
from practice_common.utils.exceptions import ValidationError

from .base import EntityRepository
from .conditions import normalize_search_term
from .filters import CommonFilter


class ItemFilter(CommonFilter):
    """Filters specific to items."""

    consumed_fields: ClassVar[frozenset[str]] = frozenset(
        {"category", "price_min", "price_max", "stock_min", "stock_max"}
    )

    type: str | None = None
    product_type: str | None = None
    is_active: bool | None = None

    category: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None
    stock_min: Decimal | None = None
    stock_max: Decimal | None = None


class ItemRepository(EntityRepository[Item]):
    """
    Repository for Item entities.

    Products track stock (defaulting to 0); services must declare a
    duration in minutes.
    """

    def __init__(self, session: Session, **kwargs):
        super().__init__(Item, session, **kwargs)

    def _entity_conditions(self, filter: CommonFilter) -> list[ColumnElement[bool]]:
        if not isinstance(filter, ItemFilter):
            return []

        conditions: list[ColumnElement[bool]] = []

        category = normalize_search_term(filter.category)
        if category:
            conditions.append(Item.category.icontains(category, autoescape=True))

        if filter.price_min is not None:
            conditions.append(Item.price >= filter.price_min)
        if filter.price_max is not None:
            conditions.append(Item.price <= filter.price_max)

        if filter.stock_min is not None:
            conditions.append(Item.stock >= filter.stock_min)
        if filter.stock_max is not None:
            conditions.append(Item.stock <= filter.stock_max)

        return conditions

    def create(
        self,
        data: Mapping[str, Any],
        tenant_id: str,
        user_id: str | None = None,
    ) -> Item:
        values = dict(data)
        if values.get("type") == ItemType.PRODUCT and values.get("stock") is None:
            values["stock"] = 0
        if values.get("type") == ItemType.SERVICE and values.get("duration") is None:
            raise ValidationError("Duration is required for services")
        return super().create(values, tenant_id, user_id)

    def update(
        self,
        entity_id: str,
        data: Mapping[str, Any],
        tenant_id: str | None = None,
        user_id: str | None = None,
    ) -> Item | None:
        if data.get("type") == ItemType.SERVICE and not data.get("duration"):
            raise ValidationError("Duration is required when changing to service type")
        return super().update(entity_id, data, tenant_id, user_id)

    def get_by_type(
        self, item_type: str, tenant_id: str, include_deleted: bool = False
    ) -> list[Item]:
        return self._find_where(tenant_id, Item.type == item_type, include_deleted=include_deleted)

    def get_products(self, tenant_id: str, include_deleted: bool = False) -> list[Item]:
        return self.get_by_type(ItemType.PRODUCT, tenant_id, include_deleted)

    def get_services(self, tenant_id: str, include_deleted: bool = False) -> list[Item]:
        return self.get_by_type(ItemType.SERVICE, tenant_id, include_deleted)

    def get_low_stock_products(
        self, tenant_id: str, threshold: int = Limits.LOW_STOCK_THRESHOLD
    ) -> list[Item]:
        """Live products with stock at or below the threshold."""
        return self._find_where(
            tenant_id,
            Item.type == ItemType.PRODUCT,
            Item.stock <= threshold,
        )

    def update_stock(
        self,
        entity_id: str,
        stock: Decimal | int,
        tenant_id: str,
        user_id: str | None = None,
    ) -> Item | None:
        """
        Set the stock level of a product.

        Returns None when the item does not exist in the tenant.

        Raises:
            ValidationError: The item is a service.
        """
        item = self.find_one(entity_id, tenant_id)
        if item is None:
            return None
        if item.type != ItemType.PRODUCT:
            raise ValidationError("Stock can only be updated for products", item_id=entity_id)
        return self.update(entity_id, {"stock": stock}, tenant_id, user_id)


def get_item_repository(db: Session) -> ItemRepository:
    """Factory function for dependency injection."""
    return ItemRepository(db)
