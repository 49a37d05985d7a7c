"""
Sale endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from practice_api.repositories import SaleFilter, get_sale_repository
from practice_api.schemas import SaleCreate, SaleStatusUpdate, SaleUpdate
from practice_api.routers._common import build_crud_router
from practice_api.services.serialization import serialize_entity, serialize_result
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context
from practice_common.utils.exceptions import NotFoundError

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("/{sale_id}/items")
def list_sale_items(
    sale_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """Lines of a sale, oldest first."""
    return serialize_result(get_sale_repository(db).get_sale_items(sale_id, ctx.organization_id))


@router.patch("/{sale_id}/status")
def update_sale_status(
    sale_id: str,
    body: SaleStatusUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, Any]:
    repo = get_sale_repository(db)
    sale = repo.update_sale_status(sale_id, body.status, ctx.organization_id, ctx.user_id)
    if sale is None:
        raise NotFoundError(repo.entity_name, sale_id, tenant_id=ctx.organization_id)
    return serialize_entity(sale)


build_crud_router(get_sale_repository, SaleFilter, SaleCreate, SaleUpdate, router=router)
