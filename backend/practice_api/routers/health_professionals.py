"""
Health professional endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from practice_api.repositories import HealthProfessionalFilter, get_health_professional_repository
from practice_api.schemas import HealthProfessionalCreate, HealthProfessionalUpdate, ProfessionalType
from practice_api.routers._common import build_crud_router
from practice_api.services.serialization import serialize_result
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context

router = APIRouter(prefix="/health-professionals", tags=["health-professionals"])


@router.get("/available")
def available_health_professionals(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """Active professionals currently taking appointments."""
    return serialize_result(get_health_professional_repository(db).find_available(ctx.organization_id))


@router.get("/type/{professional_type}")
def health_professionals_by_type(
    professional_type: ProfessionalType,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> Any:
    """Active professionals of one type."""
    repo = get_health_professional_repository(db)
    return serialize_result(repo.get_by_type(professional_type, ctx.organization_id))


@router.get("/statistics")
def health_professional_statistics(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, int]:
    return get_health_professional_repository(db).get_statistics(ctx.organization_id)


build_crud_router(
    get_health_professional_repository,
    HealthProfessionalFilter,
    HealthProfessionalCreate,
    HealthProfessionalUpdate,
    router=router,
)
