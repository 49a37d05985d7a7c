"""
Ordering and pagination for list queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.sql import Select

from practice_common.config.constants import AuditColumns, SortOrder

from .filters import CommonFilter
from .metadata import TableMetadata


@dataclass(frozen=True)
class QueryOptions:
    """ORDER BY / LIMIT / OFFSET for one query. Empty means unordered, unbounded."""

    order_by: tuple[Any, ...] = ()
    limit: int | None = None
    offset: int | None = None

    def apply(self, query: Select) -> Select:
        if self.order_by:
            query = query.order_by(*self.order_by)
        if self.limit is not None:
            query = query.limit(self.limit)
        if self.offset is not None:
            query = query.offset(self.offset)
        return query


def build_query_options(metadata: TableMetadata, filter: CommonFilter | None = None) -> QueryOptions:
    """
    Derive ordering and pagination from a filter.

    - sortBy naming a declared column sorts by it (sortOrder, default desc).
    - Otherwise rows are ordered by created_at descending when the table has it.
    - LIMIT/OFFSET are only set for paginated requests.
    """
    order_by: tuple[Any, ...] = ()

    info = metadata.resolve(filter.sort_by) if filter is not None and filter.sort_by else None
    if info is not None:
        column = metadata.column(info.attr)
        direction = filter.sort_order if filter is not None else SortOrder.DESC
        order_by = (column.asc() if direction == SortOrder.ASC else column.desc(),)
    elif metadata.has(AuditColumns.CREATED_AT):
        order_by = (metadata.column(AuditColumns.CREATED_AT).desc(),)

    if filter is None or not filter.paginated:
        return QueryOptions(order_by=order_by)

    return QueryOptions(
        order_by=order_by,
        limit=filter.limit,
        offset=(filter.page - 1) * filter.limit,
    )
