"""The jq type name of a value."""

from __future__ import annotations

from typing import Any


def type_of(v: Any) -> str:
    """Return the jq-flavoured type name of ``v``.

    Accepts only None, bool, int, float, str, list and dict; anything else
    raises TypeError.
    """
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, (int, float)):
        return "number"
    if isinstance(v, str):
        return "string"
    if isinstance(v, list):
        return "array"
    if isinstance(v, dict):
        return "object"
    raise TypeError(f"invalid type: {type(v).__name__} ({v})")