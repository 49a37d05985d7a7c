"""
Generic CRUD router for tenant-scoped entities.

Every entity exposes the same seven endpoints on top of its repository:

    GET    /               list (filter via query string, with/columns as JSON)
    GET    /{id}           fetch one
    POST   /               create
    PATCH  /{id}           update
    DELETE /{id}           remove (soft when supported)
    POST   /{id}/restore   undo a soft delete
    DELETE /{id}/hard      permanent delete

Usage:
    router = APIRouter(prefix="/patients", tags=["patients"])

    @router.get("/statistics")       # specific routes before "/{entity_id}"
    def patient_statistics(...): ...

    build_crud_router(
        get_patient_repository, PatientFilter, PatientCreate, PatientUpdate, router=router
    )
"""

from typing import Any, Callable

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from practice_api.repositories import EntityRepository, build_filter, parse_query_parameters
from practice_api.repositories.filters import CommonFilter
from practice_api.schemas import Payload
from practice_api.services.serialization import serialize_entity, serialize_result
from practice_common.infrastructure.db import get_db
from practice_common.security.context import RequestContext, get_request_context
from practice_common.utils.exceptions import NotFoundError, ValidationError


def parse_filter(filter_cls: type[CommonFilter], request: Request) -> CommonFilter:
    """Typed filter from the request query string; bad values are a 400."""
    try:
        return build_filter(filter_cls, request.query_params)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"Invalid query parameter {field}: {first.get('msg')}")


def build_crud_router(
    repository_factory: Callable[[Session], EntityRepository],
    filter_cls: type[CommonFilter],
    create_schema: type[Payload],
    update_schema: type[Payload],
    *,
    router: APIRouter | None = None,
) -> APIRouter:
    """
    Register the standard endpoint set for one entity repository.

    Routes are added to `router` when given (so entity-specific routes
    declared on it first take precedence), otherwise to a new router.
    """
    if router is None:
        router = APIRouter()

    def get_repository(db: Session = Depends(get_db)) -> EntityRepository:
        return repository_factory(db)

    @router.get("")
    def list_entities(
        request: Request,
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> Any:
        params = parse_filter(filter_cls, request)
        return serialize_result(repo.find_all(ctx.organization_id, False, params))

    @router.get("/{entity_id}")
    def get_entity(
        entity_id: str,
        include_deleted: bool = Query(default=False, alias="includeDeleted"),
        with_: str | None = Query(default=None, alias="with"),
        columns: str | None = Query(default=None),
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, Any]:
        parsed = parse_query_parameters(with_, columns)
        entity = repo.find_one(
            entity_id,
            ctx.organization_id,
            include_deleted,
            parsed.get("with"),
            parsed.get("columns"),
        )
        if entity is None:
            raise NotFoundError(repo.entity_name, entity_id, tenant_id=ctx.organization_id)
        return serialize_entity(entity)

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_entity(
        body: create_schema,  # type: ignore[valid-type]
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, Any]:
        entity = repo.create(body.to_values(), ctx.organization_id, ctx.user_id)
        return serialize_entity(entity)

    @router.patch("/{entity_id}")
    def update_entity(
        entity_id: str,
        body: update_schema,  # type: ignore[valid-type]
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, Any]:
        entity = repo.update(entity_id, body.to_values(), ctx.organization_id, ctx.user_id)
        if entity is None:
            raise NotFoundError(repo.entity_name, entity_id, tenant_id=ctx.organization_id)
        return serialize_entity(entity)

    @router.delete("/{entity_id}")
    def remove_entity(
        entity_id: str,
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, str]:
        return repo.remove(entity_id, ctx.organization_id, ctx.user_id)

    @router.post("/{entity_id}/restore")
    def restore_entity(
        entity_id: str,
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, Any]:
        entity = repo.restore(entity_id, ctx.organization_id, ctx.user_id)
        if entity is None:
            raise NotFoundError(repo.entity_name, entity_id, tenant_id=ctx.organization_id)
        return serialize_entity(entity)

    @router.delete("/{entity_id}/hard")
    def hard_delete_entity(
        entity_id: str,
        repo: EntityRepository = Depends(get_repository),
        ctx: RequestContext = Depends(get_request_context),
    ) -> dict[str, str]:
        return repo.hard_delete(entity_id, ctx.organization_id)

    return router
