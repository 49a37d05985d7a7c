"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from practice_common.utils.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Patient", patient_id)
    raise ValidationError("Duration is required for services")

Repository "not found" results are None, never an exception; routers turn
them into NotFoundError. Storage failures are not wrapped:
SQLAlchemy errors propagate and are mapped to responses by the app.
"""

from typing import Any

from fastapi import HTTPException, status

from practice_common.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Patient", patient_id)
        raise NotFoundError("Item", item_id, tenant_id=organization_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 401 Unauthorized
# =============================================================================


class UnauthorizedError(AppException):
    """Caller identity could not be resolved (401)."""

    def __init__(self, detail: str = "Organization context required", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Stock can only be updated for products")
        raise ValidationError("Invalid duration", field="duration", value=-1)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class UnsupportedOperationError(AppException):
    """
    Operation not supported by the entity's table (400).

    Raised when a caller asks for a soft-delete operation on a table that
    has no soft-delete columns: a caller/schema mismatch, not missing data.
    """

    def __init__(self, entity: str, operation: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{entity} does not support {operation}",
            log_level="error",
            entity=entity,
            operation=operation,
            **log_context,
        )

