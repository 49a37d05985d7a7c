"""
Loader options for relation inclusion and column projection.

Translates the normalized `with` tree into selectinload() options (nested
`with` entries are chained) and the `columns` map into load_only().

Usage:
    options = build_loader_options(
        meta,
        with_relations={"appointments": {"with": {"healthProfessional": True}}},
        columns={"firstName": True, "lastName": True},
    )
    query = select(Patient).options(*options)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import load_only, selectinload

from practice_common.config.logging import repository_logger as logger

from .metadata import TableMetadata


def build_relation_options(
    metadata: TableMetadata, with_relations: dict[str, Any] | None
) -> list[Any]:
    """
    selectinload() options for every included relation.

    `False` entries are skipped. An object entry includes the relation and
    may carry its own nested `with`. Unknown names are logged and skipped.
    """
    if not with_relations:
        return []

    options: list[Any] = []
    for name, spec in with_relations.items():
        if spec is False:
            continue
        attr = metadata.resolve_relation(name)
        if attr is None:
            logger.warning("Skipping unknown relation", entity=metadata.entity_name, relation=name)
            continue

        loader = selectinload(getattr(metadata.model, attr))
        nested = spec.get("with") if isinstance(spec, dict) else None
        if nested:
            target = sa_inspect(metadata.model).relationships[attr].mapper.class_
            nested_options = build_relation_options(TableMetadata.from_model(target), nested)
            if nested_options:
                loader = loader.options(*nested_options)
        options.append(loader)
    return options


def _relation_key_columns(metadata: TableMetadata, relations: list[str]) -> set[str]:
    """Local column attributes each relation needs to be loadable."""
    mapper = sa_inspect(metadata.model)
    keys: set[str] = set()
    for attr in relations:
        for column in mapper.relationships[attr].local_columns:
            keys.add(mapper.get_property_by_column(column).key)
    return keys


def build_column_options(
    metadata: TableMetadata,
    columns: dict[str, bool] | None,
    with_relations: dict[str, Any] | None = None,
) -> list[Any]:
    """
    load_only() option for a column projection.

    With any `True` entry the projection is include-only; with only
    `False` entries every other column is loaded. The primary key and the
    keys of requested relations are always loaded.
    """
    if not columns:
        return []

    included: set[str] = set()
    excluded: set[str] = set()
    for name, flag in columns.items():
        info = metadata.resolve(name)
        if info is None:
            logger.warning("Skipping unknown column", entity=metadata.entity_name, column=name)
            continue
        (included if flag else excluded).add(info.attr)

    if included:
        selected = included
    elif excluded:
        selected = set(metadata.columns) - excluded
    else:
        return []

    relations = [
        attr
        for name, spec in (with_relations or {}).items()
        if spec is not False and (attr := metadata.resolve_relation(name)) is not None
    ]
    selected |= _relation_key_columns(metadata, relations)
    selected |= {c.attr for c in metadata.columns.values() if c.primary_key}

    # Mapper order keeps the emitted SELECT stable
    ordered = [attr for attr in metadata.columns if attr in selected]
    return [load_only(*(getattr(metadata.model, attr) for attr in ordered))]


def build_loader_options(
    metadata: TableMetadata,
    with_relations: dict[str, Any] | None = None,
    columns: dict[str, bool] | None = None,
) -> list[Any]:
    """All loader options for a query."""
    return [
        *build_relation_options(metadata, with_relations),
        *build_column_options(metadata, columns, with_relations),
    ]
