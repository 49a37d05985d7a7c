"""
Medical record endpoints.
"""

from fastapi import APIRouter

from practice_api.repositories import MedicalRecordFilter, get_medical_record_repository
from practice_api.schemas import MedicalRecordCreate, MedicalRecordUpdate
from practice_api.routers._common import build_crud_router

router = APIRouter(prefix="/medical-records", tags=["medical-records"])

build_crud_router(
    get_medical_record_repository,
    MedicalRecordFilter,
    MedicalRecordCreate,
    MedicalRecordUpdate,
    router=router,
)
