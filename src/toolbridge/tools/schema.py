"""Shallow JSON Schema checks for tool arguments.

Only the top level of the schema is enforced: required keys, primitive
``type`` of each declared property, ``enum`` membership and
``additionalProperties: false``. Nested schemas are not descended into.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from toolbridge.protocol.errors import InvalidParamsError
from toolbridge.tools.models import ToolArguments


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "integer": _is_integer,
    "number": _is_number,
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
    "null": lambda v: v is None,
}


def _json_type_name(value: Any) -> str:
    for name in ("null", "boolean", "integer", "number", "string", "array", "object"):
        if _TYPE_CHECKS[name](value):
            return name
    return type(value).__name__


def _check_type(key: str, value: Any, declared: Any) -> str | None:
    names = declared if isinstance(declared, list) else [declared]
    known = [n for n in names if isinstance(n, str) and n in _TYPE_CHECKS]
    # Unknown type keywords are not enforced.
    if not known:
        return None
    if any(_TYPE_CHECKS[n](value) for n in known):
        return None
    expected = " or ".join(known)
    return f"argument '{key}' must be of type {expected}, got {_json_type_name(value)}"


def check_arguments(schema: Mapping[str, Any], arguments: Mapping[str, Any]) -> list[str]:
    """Return a list of human-readable problems; empty when *arguments* fit."""
    errors: list[str] = []
    properties: Mapping[str, Any] = schema.get("properties") or {}

    for key in schema.get("required") or []:
        if key not in arguments:
            errors.append(f"missing required argument '{key}'")

    for key, value in arguments.items():
        prop = properties.get(key)
        if prop is None:
            if schema.get("additionalProperties") is False:
                errors.append(f"unexpected argument '{key}'")
            continue
        if not isinstance(prop, Mapping):
            continue
        if "type" in prop:
            problem = _check_type(key, value, prop["type"])
            if problem:
                errors.append(problem)
                continue
        if "enum" in prop and value not in prop["enum"]:
            allowed = ", ".join(repr(v) for v in prop["enum"])
            errors.append(f"argument '{key}' must be one of {allowed}")

    return errors


def validate_arguments(
    tool: str, schema: Mapping[str, Any], arguments: Mapping[str, Any]
) -> ToolArguments:
    """Check *arguments* against *schema* and wrap them for the tool body.

    Raises:
        InvalidParamsError: Listing every problem found.
    """
    errors = check_arguments(schema, arguments)
    if errors:
        raise InvalidParamsError(f"Invalid arguments for tool '{tool}'", errors=errors)
    return ToolArguments(tool, arguments)
