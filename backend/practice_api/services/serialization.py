"""
Entity serialization for API responses.

Converts ORM instances to camelCase dictionaries. Only attributes that are
actually loaded are emitted, so a column projection (load_only) or an
omitted relation never triggers a lazy load and never shows up as null.

Usage:
    from practice_api.services.serialization import serialize_entity, serialize_result

    return serialize_entity(patient)
    return serialize_result(repo.find_all(org_id, filter=params))
"""

from __future__ import annotations

from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy import inspect as sa_inspect

from practice_api.repositories.base import Page


def serialize_entity(entity: Any, _path: frozenset[int] = frozenset()) -> dict[str, Any]:
    """
    Loaded columns and relations of an entity, keyed by camelCase name.

    Relations pointing back to an object already on the current path are
    skipped to break back-reference cycles.
    """
    state = sa_inspect(entity)
    unloaded = state.unloaded
    path = _path | {id(entity)}

    data: dict[str, Any] = {}
    for prop in state.mapper.column_attrs:
        if prop.key in unloaded:
            continue
        data[to_camel(prop.key)] = getattr(entity, prop.key)

    for rel in state.mapper.relationships:
        if rel.key in unloaded:
            continue
        value = getattr(entity, rel.key)
        if value is None:
            data[to_camel(rel.key)] = None
        elif rel.uselist:
            data[to_camel(rel.key)] = [
                serialize_entity(child, path) for child in value if id(child) not in path
            ]
        elif id(value) not in path:
            data[to_camel(rel.key)] = serialize_entity(value, path)

    return data


def serialize_result(result: Any) -> Any:
    """Serialize a repository list result: a list of entities or a Page."""
    if isinstance(result, Page):
        return {
            "data": [serialize_entity(e) for e in result.data],
            "total": result.total,
            "page": result.page,
            "limit": result.limit,
        }
    return [serialize_entity(e) for e in result]
