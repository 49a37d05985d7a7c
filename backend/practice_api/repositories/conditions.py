"""
WHERE-clause construction for list and lookup queries.

Clauses are collected in a fixed order (tenant, soft delete, search, date
range, status, equality, entity hooks) and combined with AND. The
soft-delete clause is tagged so a filter asking for deleted rows can drop
it after the fact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from practice_common.config.constants import AuditColumns, Limits
from practice_common.config.logging import repository_logger as logger

from .filters import CommonFilter
from .metadata import ColumnInfo, ColumnKind, TableMetadata

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


@dataclass(frozen=True)
class Clause:
    """A predicate plus the tag used for post-filtering."""

    expression: ColumnElement[bool]
    soft_delete: bool = False


def normalize_search_term(term: str | None) -> str | None:
    """Trim and cap a search term; None when nothing is left."""
    if term is None:
        return None
    term = term.strip()[: Limits.MAX_SEARCH_TERM_LENGTH]
    return term or None


def coerce_value(info: ColumnInfo, value: Any) -> Any:
    """Convert query-string text for boolean columns."""
    if info.kind is ColumnKind.BOOLEAN and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return value


class ConditionBuilder:
    """Builds the combined predicate for one table."""

    def __init__(self, metadata: TableMetadata):
        self._meta = metadata

    def clauses(
        self,
        tenant_id: str | None = None,
        include_deleted: bool = False,
        filter: CommonFilter | None = None,
        extra: Iterable[ColumnElement[bool]] = (),
    ) -> list[Clause]:
        """Ordered, tagged clauses before combination."""
        meta = self._meta
        clauses: list[Clause] = []

        if tenant_id is not None:
            if not meta.tenant_scoped:
                raise AttributeError(
                    f"Model {meta.model.__name__} does not have {AuditColumns.TENANT} column."
                )
            clauses.append(Clause(meta.column(AuditColumns.TENANT) == tenant_id))

        if meta.soft_delete and not include_deleted:
            clauses.append(
                Clause(meta.column(AuditColumns.DELETED_AT).is_(None), soft_delete=True)
            )

        if filter is not None:
            clauses.extend(self._filter_clauses(filter))

        clauses.extend(Clause(expression) for expression in extra)

        if filter is not None and filter.include_deleted:
            clauses = [c for c in clauses if not c.soft_delete]

        return clauses

    def build(
        self,
        tenant_id: str | None = None,
        include_deleted: bool = False,
        filter: CommonFilter | None = None,
        extra: Iterable[ColumnElement[bool]] = (),
    ) -> ColumnElement[bool] | None:
        """
        Combined predicate, or None when there is nothing to filter on.

        Args:
            tenant_id: Restrict to this organization.
            include_deleted: Keep soft-deleted rows.
            filter: Parsed list filter.
            extra: Entity-specific predicates appended after equality.
        """
        clauses = self.clauses(tenant_id, include_deleted, filter, extra)
        if not clauses:
            return None
        return and_(*(c.expression for c in clauses))

    def _filter_clauses(self, filter: CommonFilter) -> list[Clause]:
        meta = self._meta
        clauses: list[Clause] = []

        term = normalize_search_term(filter.search)
        if term:
            searchable = meta.string_columns
            if searchable:
                clauses.append(
                    Clause(
                        or_(
                            *(
                                meta.column(c.attr).contains(term, autoescape=True)
                                for c in searchable
                            )
                        )
                    )
                )

        if meta.has(AuditColumns.CREATED_AT):
            created_at = meta.column(AuditColumns.CREATED_AT)
            if filter.date_from is not None:
                clauses.append(Clause(created_at >= filter.date_from))
            if filter.date_to is not None:
                clauses.append(Clause(created_at <= filter.date_to))

        if filter.status and meta.has(AuditColumns.STATUS):
            clauses.append(Clause(meta.column(AuditColumns.STATUS) == filter.status))

        for key, value in filter.equality_fields().items():
            info = meta.resolve(key)
            if info is None:
                logger.debug("Ignoring unknown filter field", entity=meta.entity_name, field=key)
                continue
            clauses.append(Clause(meta.column(info.attr) == coerce_value(info, value)))

        return clauses
