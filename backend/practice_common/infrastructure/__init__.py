"""
Infrastructure: database wiring and request correlation.
"""

from practice_common.infrastructure.db import (
    build_engine,
    build_session_factory,
    get_db,
    safe_commit,
)
from practice_common.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    get_request_id,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "get_db",
    "safe_commit",
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "get_request_id",
]
