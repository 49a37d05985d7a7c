"""
Item endpoints: products and services.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from practice_api.repositories import ItemFilter, get_item_repository
from practice_api.schemas import ItemCreate, ItemUpdate, StockUpdate
from practice_api.routers._common import build_crud_router
from practice_api.services.serialization import serialize_entity, serialize_result
from practice_common.config.constants import Limits
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context
from practice_common.utils.exceptions import NotFoundError

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/low-stock")
def low_stock_products(
    threshold: int = Query(default=Limits.LOW_STOCK_THRESHOLD, ge=0),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """Products with stock at or below the threshold."""
    repo = get_item_repository(db)
    return serialize_result(repo.get_low_stock_products(ctx.organization_id, threshold))


@router.put("/{item_id}/stock")
def update_item_stock(
    item_id: str,
    body: StockUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, Any]:
    repo = get_item_repository(db)
    item = repo.update_stock(item_id, body.stock, ctx.organization_id, ctx.user_id)
    if item is None:
        raise NotFoundError(repo.entity_name, item_id, tenant_id=ctx.organization_id)
    return serialize_entity(item)


build_crud_router(get_item_repository, ItemFilter, ItemCreate, ItemUpdate, router=router)
