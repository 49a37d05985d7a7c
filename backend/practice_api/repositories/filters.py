"""
Filter schemas for list queries.

CommonFilter holds the fields every entity understands. Entity filters
subclass it and declare their own optional fields; anything they declare
(and any undeclared extra key) is matched by equality against the column
of the same name, unless the entity repository consumes it through a hook.

Usage:
    params = build_filter(PatientFilter, {"search": "ana", "bloodType": "O+"})
    params.equality_fields()  # {"blood_type": "O+"}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from practice_common.config.constants import Limits, SortOrder

from .query_params import (
    parse_query_parameters,
    safe_parse_json,
    validate_columns_parameter,
    validate_with_parameter,
)


class CommonFilter(BaseModel):
    """Fields shared by all list queries."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    # Entity fields handled by repository hooks instead of plain equality
    consumed_fields: ClassVar[frozenset[str]] = frozenset()

    search: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    status: str | None = None

    paginated: bool = False
    page: int = Limits.DEFAULT_PAGE
    limit: int = Limits.DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] = SortOrder.DESC

    include_deleted: bool = False
    with_: dict[str, Any] | None = Field(default=None, alias="with")
    columns: dict[str, bool] | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, v: Any) -> int:
        if v is None or v == "":
            return Limits.DEFAULT_PAGE
        return min(max(int(v), 1), Limits.MAX_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, v: Any) -> int:
        if v is None or v == "":
            return Limits.DEFAULT_PAGE_SIZE
        return min(max(int(v), 1), Limits.MAX_PAGE_SIZE)

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_sort_order(cls, v: Any) -> str:
        if isinstance(v, str) and v.lower() in SortOrder.ALL:
            return v.lower()
        return SortOrder.DESC

    @field_validator("with_", mode="before")
    @classmethod
    def _normalize_with(cls, v: Any) -> dict[str, Any] | None:
        if isinstance(v, str):
            v = safe_parse_json(v)
        return validate_with_parameter(v) or None

    @field_validator("columns", mode="before")
    @classmethod
    def _normalize_columns(cls, v: Any) -> dict[str, bool] | None:
        if isinstance(v, str):
            v = safe_parse_json(v)
        return validate_columns_parameter(v) or None

    def equality_fields(self) -> dict[str, Any]:
        """
        Entity-specific values to match by equality.

        Set fields declared by the subclass (minus consumed ones) keyed by
        attribute name, plus extra keys as given. None values are skipped.
        """
        declared = type(self).model_fields
        fields: dict[str, Any] = {}
        for name in self.model_fields_set:
            if name not in declared or name in COMMON_FILTER_FIELDS:
                continue
            if name in self.consumed_fields:
                continue
            value = getattr(self, name)
            if value is not None:
                fields[name] = value
        for key, value in (self.model_extra or {}).items():
            if value is not None:
                fields[key] = value
        return fields


COMMON_FILTER_FIELDS: frozenset[str] = frozenset(CommonFilter.model_fields)


def build_filter(filter_cls: type[CommonFilter], params: Mapping[str, Any]) -> CommonFilter:
    """
    Build a typed filter from raw query-string parameters.

    `with` and `columns` arrive as JSON text and go through the query
    parameter normalizer first; an empty result leaves the field unset.
    """
    raw = dict(params)
    # Already-decoded mappings go straight to the field validators
    text = {key: raw.pop(key) for key in ("with", "columns") if isinstance(raw.get(key), str)}
    raw.update(parse_query_parameters(text.get("with"), text.get("columns")))
    return filter_cls.model_validate(raw)
