"""
Request context: who is calling and for which organization.

Identity resolution (tokens, sessions, organization membership) happens in
front of this service; the resolved ids arrive as trusted headers set by
the gateway. Routers depend on get_request_context() and pass the ids to
the repositories.
"""

from dataclasses import dataclass

from fastapi import Header

from practice_common.utils.exceptions import UnauthorizedError

ORGANIZATION_HEADER = "X-Organization-Id"
USER_HEADER = "X-User-Id"


@dataclass(frozen=True)
class RequestContext:
    """Resolved caller identity."""

    organization_id: str
    user_id: str | None = None


def get_request_context(
    x_organization_id: str | None = Header(default=None, alias=ORGANIZATION_HEADER),
    x_user_id: str | None = Header(default=None, alias=USER_HEADER),
) -> RequestContext:
    """
    FastAPI dependency returning the caller's organization and user.

    Raises:
        UnauthorizedError: If no organization was resolved for the caller.
    """
    organization_id = (x_organization_id or "").strip()
    if not organization_id:
        raise UnauthorizedError()

    user_id = (x_user_id or "").strip() or None
    return RequestContext(organization_id=organization_id, user_id=user_id)
