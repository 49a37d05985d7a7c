"""
Client Repository - Data access for billable parties.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from practice_api.models import Client

from .base import EntityRepository
from .filters import CommonFilter


class ClientFilter(CommonFilter):
    """Filters specific to clients."""

    company: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None
    is_active: bool | None = None


class ClientRepository(EntityRepository[Client]):
    """Repository for Client entities."""

    def __init__(self, session: Session, **kwargs):
        super().__init__(Client, session, **kwargs)


def get_client_repository(db: Session) -> ClientRepository:
    """Factory function for dependency injection."""
    return ClientRepository(db)
