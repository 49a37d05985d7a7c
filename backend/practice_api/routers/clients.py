"""
Client endpoints.
"""

from fastapi import APIRouter

from practice_api.repositories import ClientFilter, get_client_repository
from practice_api.schemas import ClientCreate, ClientUpdate
from practice_api.routers._common import build_crud_router

router = APIRouter(prefix="/clients", tags=["clients"])

build_crud_router(get_client_repository, ClientFilter, ClientCreate, ClientUpdate, router=router)
