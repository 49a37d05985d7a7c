"""
Centralized constants for the backend application.

Usage:
    from practice_common.config.constants import Limits, SortOrder, AppointmentStatus

    limit = min(limit, Limits.MAX_PAGE_SIZE)

    if appointment.status == AppointmentStatus.CANCELLED:
        ...
"""

from typing import Final


# =============================================================================
# Query limits
# =============================================================================


class Limits:
    """Validation limits for list endpoints."""

    # Pagination defaults
    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100
    # Keeps (page - 1) * MAX_PAGE_SIZE inside a signed 64-bit OFFSET
    MAX_PAGE: Final[int] = 1_000_000_000

    # Free-text search
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Items at or below this stock are reported as low stock
    LOW_STOCK_THRESHOLD: Final[int] = 10


class SortOrder:
    """Sort direction constants."""

    ASC: Final[str] = "asc"
    DESC: Final[str] = "desc"

    ALL: Final[list[str]] = [ASC, DESC]


# =============================================================================
# Audit / tenancy column names
# =============================================================================


class AuditColumns:
    """Attribute names with special meaning for the generic repository."""

    TENANT: Final[str] = "organization_id"
    CREATED_AT: Final[str] = "created_at"
    UPDATED_AT: Final[str] = "updated_at"
    CREATED_BY: Final[str] = "created_by"
    UPDATED_BY: Final[str] = "updated_by"
    DELETED_AT: Final[str] = "deleted_at"
    DELETED_BY: Final[str] = "deleted_by"
    STATUS: Final[str] = "status"

    AUDIT: Final[frozenset[str]] = frozenset(
        {CREATED_AT, UPDATED_AT, CREATED_BY, UPDATED_BY}
    )
    SOFT_DELETE: Final[frozenset[str]] = frozenset({DELETED_AT, DELETED_BY})

    # Never accepted from callers on create/update
    PROTECTED: Final[frozenset[str]] = AUDIT | SOFT_DELETE | {TENANT}


# =============================================================================
# Entity status constants
# =============================================================================


class AppointmentStatus:
    """Appointment status constants."""

    SCHEDULED: Final[str] = "scheduled"
    CONFIRMED: Final[str] = "confirmed"
    IN_PROGRESS: Final[str] = "in_progress"
    COMPLETED: Final[str] = "completed"
    CANCELLED: Final[str] = "cancelled"
    NO_SHOW: Final[str] = "no_show"


class ItemType:
    """Item type discriminator."""

    PRODUCT: Final[str] = "product"
    SERVICE: Final[str] = "service"

