"""
API routers, mounted under /api.
"""

from .appointments import router as appointments_router
from .clients import router as clients_router
from .health import router as health_router
from .health_professionals import router as health_professionals_router
from .items import router as items_router
from .medical_records import router as medical_records_router
from .patients import router as patients_router
from .sales import router as sales_router

ROUTERS = [
    health_router,
    patients_router,
    health_professionals_router,
    appointments_router,
    medical_records_router,
    clients_router,
    items_router,
    sales_router,
]

__all__ = ["ROUTERS"]
