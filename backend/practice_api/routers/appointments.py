"""
Appointment endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from practice_api.repositories import AppointmentFilter, get_appointment_repository
from practice_api.schemas import AppointmentCreate, AppointmentUpdate
from practice_api.routers._common import build_crud_router
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("/statistics")
def appointment_statistics(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, int]:
    return get_appointment_repository(db).get_statistics(ctx.organization_id)


build_crud_router(
    get_appointment_repository, AppointmentFilter, AppointmentCreate, AppointmentUpdate, router=router
)
