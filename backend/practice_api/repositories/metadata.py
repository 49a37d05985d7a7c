"""
Table metadata for the generic repository.

Instead of probing a model for attributes on every call, each repository
holds one TableMetadata describing the capabilities of its table: which
columns exist and of what kind, whether rows are tenant-scoped, audited
or soft-deletable, and which relations can be eager-loaded.

Free-text search covers the String/Text columns that hold content. Key
columns (primary and foreign keys), enum columns and the tenant, audit and
soft-delete columns are not searchable even when they store strings.

Usage:
    meta = TableMetadata.from_model(Patient)
    meta.soft_delete          # True
    meta.resolve("roomNumber")  # ColumnInfo for room_number, or None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy import Boolean, Date, DateTime, Enum as SAEnum, Float, Integer, Numeric, String, Time
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.types import TypeEngine

from practice_common.config.constants import AuditColumns


class ColumnKind(str, Enum):
    """Primitive data kind of a column."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    OTHER = "other"


def column_kind(sql_type: TypeEngine) -> ColumnKind:
    """Classify a SQLAlchemy column type."""
    if isinstance(sql_type, Boolean):
        return ColumnKind.BOOLEAN
    if isinstance(sql_type, String):
        return ColumnKind.STRING
    if isinstance(sql_type, (Integer, Numeric, Float)):
        return ColumnKind.NUMBER
    if isinstance(sql_type, (Date, DateTime, Time)):
        return ColumnKind.DATE
    return ColumnKind.OTHER


@dataclass(frozen=True)
class ColumnInfo:
    """One mapped column."""

    attr: str
    kind: ColumnKind
    searchable: bool = False
    primary_key: bool = False
    foreign_key: bool = False

    @property
    def wire_name(self) -> str:
        return to_camel(self.attr)


@dataclass(frozen=True)
class TableMetadata:
    """
    Capabilities of one entity table.

    Attributes:
        model: Mapped class the repository reads and writes.
        table_name: SQL table name.
        columns: Declared columns keyed by attribute name.
        relations: Relationship attribute names available for eager loading.
        soft_delete: Table has deleted_at/deleted_by.
        auditable: Table has created/updated timestamps and user ids.
        tenant_scoped: Table has organization_id.
    """

    model: type
    table_name: str
    columns: dict[str, ColumnInfo]
    relations: frozenset[str] = frozenset()
    soft_delete: bool = False
    auditable: bool = False
    tenant_scoped: bool = False
    _aliases: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        aliases = {}
        for attr in self.columns:
            aliases[attr] = attr
            aliases.setdefault(to_camel(attr), attr)
        for rel in self.relations:
            aliases.setdefault(rel, rel)
            aliases.setdefault(to_camel(rel), rel)
        # frozen dataclass: populate the cache in place
        self._aliases.update(aliases)

    @classmethod
    def from_model(cls, model: type) -> TableMetadata:
        """Build metadata by inspecting the model's mapper once."""
        mapper = sa_inspect(model)

        columns: dict[str, ColumnInfo] = {}
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            kind = column_kind(column.type)
            is_fk = bool(column.foreign_keys)
            searchable = (
                kind is ColumnKind.STRING
                and not isinstance(column.type, SAEnum)
                and not column.primary_key
                and not is_fk
                and prop.key not in AuditColumns.PROTECTED
            )
            columns[prop.key] = ColumnInfo(
                attr=prop.key,
                kind=kind,
                searchable=searchable,
                primary_key=bool(column.primary_key),
                foreign_key=is_fk,
            )

        names = set(columns)
        return cls(
            model=model,
            table_name=mapper.local_table.name,
            columns=columns,
            relations=frozenset(mapper.relationships.keys()),
            soft_delete=AuditColumns.DELETED_AT in names,
            auditable={AuditColumns.UPDATED_AT, AuditColumns.UPDATED_BY} <= names,
            tenant_scoped=AuditColumns.TENANT in names,
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    @property
    def entity_name(self) -> str:
        """
        Human-readable name derived from the table name:
        "health_professionals" -> "HealthProfessionals".
        """
        return "".join(word[:1].upper() + word[1:].lower() for word in self.table_name.split("_"))

    @property
    def string_columns(self) -> list[ColumnInfo]:
        """Columns free-text search runs against."""
        return [c for c in self.columns.values() if c.searchable]

    def has(self, attr: str) -> bool:
        return attr in self.columns

    def resolve(self, key: str) -> ColumnInfo | None:
        """Column for an attribute name or its camelCase wire name."""
        attr = self._aliases.get(key)
        if attr is None:
            return None
        return self.columns.get(attr)

    def resolve_relation(self, key: str) -> str | None:
        """Relationship attribute for a name or its camelCase wire name."""
        attr = self._aliases.get(key)
        if attr is None or attr not in self.relations:
            return None
        return attr

    def column(self, attr: str) -> Any:
        """Instrumented attribute for a declared column."""
        return getattr(self.model, attr)
