"""
Generic tenant-scoped entity repository.

Every entity repository extends EntityRepository. The table's capabilities
(tenant column, audit columns, soft delete) come from its TableMetadata,
computed once at construction. Queries are always scoped to the caller's
organization when a tenant id is given, and soft-deleted rows are hidden
unless explicitly requested.

Usage:
    repo = EntityRepository(Patient, db)

    patient = repo.create({"first_name": "Ana", ...}, tenant_id=org_id, user_id=uid)
    page = repo.find_all(org_id, filter=PatientFilter(paginated=True, limit=10))
    repo.remove(patient.id, org_id, uid)      # soft delete
    repo.restore(patient.id, org_id, uid)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Mapping, TypeVar

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from practice_api.models import Base
from practice_common.config.constants import AuditColumns
from practice_common.config.logging import repository_logger as logger
from practice_common.infrastructure.db import safe_commit
from practice_common.utils.exceptions import UnsupportedOperationError

from .conditions import ConditionBuilder
from .filters import CommonFilter
from .loading import build_loader_options
from .metadata import TableMetadata
from .options import build_query_options

ModelT = TypeVar("ModelT", bound=Base)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Page(Generic[ModelT]):
    """One page of a paginated list query."""

    data: list[ModelT]
    total: int
    page: int
    limit: int


class EntityRepository(Generic[ModelT]):
    """
    CRUD with tenant isolation, audit stamping and soft delete.

    Subclasses add entity-specific predicates by overriding
    `_entity_conditions` and may add their own finder methods.

    Not-found is reported as None; persistence failures roll back the
    session and propagate as SQLAlchemyError.
    """

    def __init__(
        self,
        model: type[ModelT],
        session: Session,
        metadata: TableMetadata | None = None,
        clock: Clock | None = None,
    ):
        self._model = model
        self._session = session
        self._meta = metadata or TableMetadata.from_model(model)
        self._conditions = ConditionBuilder(self._meta)
        self._clock = clock or utc_now

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    @property
    def metadata(self) -> TableMetadata:
        return self._meta

    @property
    def entity_name(self) -> str:
        return self._meta.entity_name

    # =========================================================================
    # Hooks
    # =========================================================================

    def _entity_conditions(self, filter: CommonFilter) -> list[ColumnElement[bool]]:
        """Entity-specific predicates (ranges, partial matches). None by default."""
        return []

    # =========================================================================
    # Helpers
    # =========================================================================

    def _where(
        self,
        tenant_id: str | None,
        include_deleted: bool,
        filter: CommonFilter | None = None,
    ) -> ColumnElement[bool] | None:
        extra = self._entity_conditions(filter) if filter is not None else []
        return self._conditions.build(tenant_id, include_deleted, filter, extra)

    def _by_id(
        self, entity_id: str, tenant_id: str | None, include_deleted: bool
    ) -> ColumnElement[bool]:
        scope = self._conditions.build(tenant_id, include_deleted)
        id_clause = self._model.id == entity_id
        return id_clause if scope is None else and_(id_clause, scope)

    def _writable(self, data: Mapping[str, Any], *, allow_primary_key: bool) -> dict[str, Any]:
        """
        Keep caller values that map to declared, non-protected columns.

        Keys may be attribute names or camelCase wire names.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            info = self._meta.resolve(key)
            if info is None or info.attr in AuditColumns.PROTECTED:
                logger.debug("Dropping non-writable field", entity=self.entity_name, field=key)
                continue
            if info.primary_key and not allow_primary_key:
                continue
            values[info.attr] = value
        return values

    def _touch(self, values: dict[str, Any], user_id: str | None) -> dict[str, Any]:
        if self._meta.auditable:
            values[AuditColumns.UPDATED_AT] = self._clock()
            values[AuditColumns.UPDATED_BY] = user_id
        return values

    def _columns(self, values: Mapping[str, Any]) -> dict[Any, Any]:
        """Key values by instrumented attribute for ORM-enabled UPDATE."""
        return {getattr(self._model, attr): value for attr, value in values.items()}

    def _select(self, where: ColumnElement[bool] | None) -> Select:
        query = select(self._model)
        if where is not None:
            query = query.where(where)
        return query

    def _count_where(self, where: ColumnElement[bool] | None) -> int:
        query = select(func.count()).select_from(self._model)
        if where is not None:
            query = query.where(where)
        return self._session.scalar(query) or 0

    def _find_where(
        self,
        tenant_id: str | None,
        *criteria: ColumnElement[bool],
        include_deleted: bool = False,
        order_by: Any = None,
    ) -> list[ModelT]:
        """Rows in scope matching extra criteria; default ordering unless given."""
        query = self._select(self._conditions.build(tenant_id, include_deleted, extra=criteria))
        if order_by is not None:
            query = query.order_by(order_by)
        else:
            query = build_query_options(self._meta).apply(query)
        return list(self._session.scalars(query).all())

    # =========================================================================
    # Operations
    # =========================================================================

    def _new_entity(
        self,
        data: Mapping[str, Any],
        tenant_id: str,
        user_id: str | None = None,
    ) -> ModelT:
        """Unsaved instance with ownership and audit fields set."""
        values = self._writable(data, allow_primary_key=True)
        if self._meta.tenant_scoped:
            values[AuditColumns.TENANT] = tenant_id
        if self._meta.auditable:
            now = self._clock()
            values[AuditColumns.CREATED_AT] = now
            values[AuditColumns.UPDATED_AT] = now
            values[AuditColumns.CREATED_BY] = user_id
            values[AuditColumns.UPDATED_BY] = user_id
        return self._model(**values)

    def _save_new(self, entity: ModelT, tenant_id: str, user_id: str | None) -> ModelT:
        self._session.add(entity)
        safe_commit(self._session)
        self._session.refresh(entity)

        logger.info(
            "Entity created",
            entity=self.entity_name,
            entity_id=entity.id,
            tenant_id=tenant_id,
            user_id=user_id,
        )
        return entity

    def create(
        self,
        data: Mapping[str, Any],
        tenant_id: str,
        user_id: str | None = None,
    ) -> ModelT:
        """
        Insert a row owned by `tenant_id`.

        Audit, tenant and soft-delete values supplied by the caller are
        ignored; ownership and audit fields are always set here.
        """
        return self._save_new(self._new_entity(data, tenant_id, user_id), tenant_id, user_id)

    def find_all(
        self,
        tenant_id: str | None = None,
        include_deleted: bool = False,
        filter: CommonFilter | None = None,
    ) -> list[ModelT] | Page[ModelT]:
        """
        List rows matching the filter.

        Returns a plain list, or a Page with the total match count when
        the filter asks for pagination.
        """
        where = self._where(tenant_id, include_deleted, filter)

        query = self._select(where)
        if filter is not None:
            query = query.options(*build_loader_options(self._meta, filter.with_, filter.columns))
        query = build_query_options(self._meta, filter).apply(query)

        rows = list(self._session.scalars(query).all())
        logger.debug(
            "Entities listed",
            entity=self.entity_name,
            tenant_id=tenant_id,
            count=len(rows),
        )

        if filter is not None and filter.paginated:
            return Page(
                data=rows,
                total=self._count_where(where),
                page=filter.page,
                limit=filter.limit,
            )
        return rows

    def find_one(
        self,
        entity_id: str,
        tenant_id: str | None = None,
        include_deleted: bool = False,
        with_relations: dict[str, Any] | None = None,
        columns: dict[str, bool] | None = None,
    ) -> ModelT | None:
        """Row by id within the tenant, or None."""
        query = self._select(self._by_id(entity_id, tenant_id, include_deleted))
        query = query.options(*build_loader_options(self._meta, with_relations, columns))
        return self._session.scalars(query).first()

    def count(
        self,
        tenant_id: str | None = None,
        include_deleted: bool = False,
        filter: CommonFilter | None = None,
    ) -> int:
        """Number of rows matching the filter, ignoring sort and pagination."""
        return self._count_where(self._where(tenant_id, include_deleted, filter))

    def update(
        self,
        entity_id: str,
        data: Mapping[str, Any],
        tenant_id: str | None = None,
        user_id: str | None = None,
    ) -> ModelT | None:
        """
        Update a live row within the tenant.

        Returns the updated row, or None when no live row matched.
        """
        values = self._touch(self._writable(data, allow_primary_key=False), user_id)
        if not values:
            return self.find_one(entity_id, tenant_id)

        stmt = (
            update(self._model)
            .where(self._by_id(entity_id, tenant_id, include_deleted=False))
            .values(self._columns(values))
            .returning(self._model)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        entity = self._session.scalars(stmt).first()
        safe_commit(self._session)

        if entity is not None:
            logger.info(
                "Entity updated",
                entity=self.entity_name,
                entity_id=entity_id,
                tenant_id=tenant_id,
                user_id=user_id,
                fields=sorted(values),
            )
        return entity

    def remove(
        self,
        entity_id: str,
        tenant_id: str | None = None,
        user_id: str | None = None,
    ) -> dict[str, str]:
        """
        Delete a live row: soft when the table supports it, hard otherwise.

        The confirmation is returned whether or not a row matched.
        """
        where = self._by_id(entity_id, tenant_id, include_deleted=False)

        if self._meta.soft_delete:
            values = self._touch(
                {
                    AuditColumns.DELETED_AT: self._clock(),
                    AuditColumns.DELETED_BY: user_id,
                },
                user_id,
            )
            stmt = (
                update(self._model)
                .where(where)
                .values(self._columns(values))
                .execution_options(synchronize_session="fetch")
            )
        else:
            stmt = delete(self._model).where(where).execution_options(synchronize_session="fetch")

        self._session.execute(stmt)
        safe_commit(self._session)

        logger.info(
            "Entity removed",
            entity=self.entity_name,
            entity_id=entity_id,
            tenant_id=tenant_id,
            user_id=user_id,
            soft=self._meta.soft_delete,
        )
        return {"message": f"{self.entity_name} deleted successfully"}

    def restore(
        self,
        entity_id: str,
        tenant_id: str | None = None,
        user_id: str | None = None,
    ) -> ModelT | None:
        """
        Clear the soft-delete marker of a row within the tenant.

        Raises:
            UnsupportedOperationError: The table has no soft delete.
        """
        if not self._meta.soft_delete:
            raise UnsupportedOperationError(self.entity_name, "soft delete")

        values = self._touch(
            {AuditColumns.DELETED_AT: None, AuditColumns.DELETED_BY: None},
            user_id,
        )
        stmt = (
            update(self._model)
            .where(self._by_id(entity_id, tenant_id, include_deleted=True))
            .values(self._columns(values))
            .returning(self._model)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        entity = self._session.scalars(stmt).first()
        safe_commit(self._session)

        if entity is not None:
            logger.info(
                "Entity restored",
                entity=self.entity_name,
                entity_id=entity_id,
                tenant_id=tenant_id,
                user_id=user_id,
            )
        return entity

    def hard_delete(self, entity_id: str, tenant_id: str | None = None) -> dict[str, str]:
        """Physically delete a row (deleted or not) within the tenant."""
        stmt = (
            delete(self._model)
            .where(self._by_id(entity_id, tenant_id, include_deleted=True))
            .execution_options(synchronize_session="fetch")
        )
        self._session.execute(stmt)
        safe_commit(self._session)

        logger.warning(
            "Entity permanently deleted",
            entity=self.entity_name,
            entity_id=entity_id,
            tenant_id=tenant_id,
        )
        return {"message": f"{self.entity_name} permanently deleted"}
