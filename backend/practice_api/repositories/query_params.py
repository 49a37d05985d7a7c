"""
Normalization of the `with` and `columns` query parameters.

Both arrive from the query string as JSON text. Malformed input degrades to
"no inclusion" / "no projection" and is logged, never raised.

Usage:
    parsed = parse_query_parameters('{"appointments": true}', None)
    # {"with": {"appointments": True}}
"""

from __future__ import annotations

import json
from typing import Any

from practice_common.config.logging import repository_logger as logger


def safe_parse_json(raw: str | None) -> Any:
    """Decode JSON text, returning None for empty or malformed input."""
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Ignoring malformed JSON query parameter", value=raw[:200], error=str(e))
        return None


def validate_with_parameter(value: Any) -> dict[str, Any]:
    """
    Keep only well-formed relation entries.

    A boolean entry passes as is. An object entry keeps its boolean values
    and a nested `with` (validated recursively); if nothing survives, the
    entry is dropped. Any other shape drops only that entry.
    """
    if not isinstance(value, dict):
        return {}

    result: dict[str, Any] = {}
    for name, spec in value.items():
        if isinstance(spec, bool):
            result[name] = spec
        elif isinstance(spec, dict):
            nested: dict[str, Any] = {}
            for key, item in spec.items():
                if key == "with" and isinstance(item, dict):
                    nested["with"] = validate_with_parameter(item)
                elif isinstance(item, bool):
                    nested[key] = item
            if nested:
                result[name] = nested
        else:
            logger.warning("Dropping invalid relation entry", relation=name)
    return result


def validate_columns_parameter(value: Any) -> dict[str, bool]:
    """Keep only boolean column entries."""
    if not isinstance(value, dict):
        return {}
    return {name: flag for name, flag in value.items() if isinstance(flag, bool)}


def parse_with_parameter(raw: str | None) -> dict[str, Any]:
    return validate_with_parameter(safe_parse_json(raw))


def parse_columns_parameter(raw: str | None) -> dict[str, bool]:
    return validate_columns_parameter(safe_parse_json(raw))


def parse_query_parameters(with_raw: str | None, columns_raw: str | None) -> dict[str, Any]:
    """
    Parse both parameters; keys whose result is empty are omitted.

    Returns:
        Dict with optional "with" and "columns" entries.
    """
    result: dict[str, Any] = {}
    with_tree = parse_with_parameter(with_raw)
    if with_tree:
        result["with"] = with_tree
    columns = parse_columns_parameter(columns_raw)
    if columns:
        result["columns"] = columns
    return result
