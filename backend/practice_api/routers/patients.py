"""
Patient endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from practice_api.repositories import PatientFilter, get_patient_repository
from practice_api.schemas import PatientCreate, PatientUpdate
from practice_api.routers._common import build_crud_router
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("/statistics")
def patient_statistics(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, int]:
    """Total, active and inactive patient counts for the organization."""
    return get_patient_repository(db).get_statistics(ctx.organization_id)


build_crud_router(get_patient_repository, PatientFilter, PatientCreate, PatientUpdate, router=router)
