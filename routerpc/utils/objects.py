"""
Helpers for structured values that cross the RPC boundary.

Provides:
- UNDEFINED sentinel for "no value" (None is JSON null and is kept)
- omit_undefined: cycle-safe removal of UNDEFINED fields
- safe_stringify: JSON encoding that reports failures instead of raising
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable


class _Undefined:
    """Marker for a field that has no value at all."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_Undefined":
        return self


UNDEFINED: Any = _Undefined()

_PRIMITIVES = (str, bytes, int, float, bool, type(None))


def is_undefined(value: Any) -> bool:
    return value is UNDEFINED


def _own_fields(obj: Any, enumerable_only: bool) -> dict[str, Any] | None:
    """List attribute fields of a non-container object, or None if it has none."""
    try:
        attrs = vars(obj)
    except TypeError:
        return None
    if enumerable_only:
        return {k: v for k, v in attrs.items() if not k.startswith("_")}
    return dict(attrs)


def _omit(
    value: Any,
    depth: int,
    seen: set[int],
    enumerable_only: bool,
    max_depth: int | None,
) -> Any:
    if max_depth is not None and depth > max_depth:
        return value
    if isinstance(value, _PRIMITIVES) or value is UNDEFINED:
        return value
    if callable(value) and not isinstance(value, Mapping):
        return value

    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        if id(value) in seen:
            return UNDEFINED
        seen.add(id(value))
        kept = []
        for item in value:
            if item is UNDEFINED:
                continue
            cleaned = _omit(item, depth + 1, seen, enumerable_only, max_depth)
            if cleaned is not UNDEFINED:
                kept.append(cleaned)
        return kept
    else:
        fields = _own_fields(value, enumerable_only)
        if fields is None:
            # Opaque leaf; never descended into, so never tracked.
            return value
        items = list(fields.items())

    if id(value) in seen:
        return UNDEFINED
    seen.add(id(value))

    result: dict[Any, Any] = {}
    for key, item in items:
        if item is UNDEFINED:
            continue
        cleaned = _omit(item, depth + 1, seen, enumerable_only, max_depth)
        if cleaned is not UNDEFINED:
            result[key] = cleaned
    return result


def omit_undefined(value: Any, enumerable_only: bool = False, max_depth: int | None = None) -> Any:
    """
    Return a copy of ``value`` without UNDEFINED fields at any depth.

    Args:
        value: Mapping, list, attribute object or primitive.
        enumerable_only: If True, objects contribute public attributes only.
            If False, private (underscore) attributes are listed as well.
        max_depth: Values nested deeper than this are returned as-is.

    A container reached a second time in the same call resolves to UNDEFINED
    and is dropped from its parent, so self-referencing input terminates.
    """
    return _omit(value, 0, set(), enumerable_only, max_depth)


def safe_stringify(
    value: Any,
    *,
    indent: int | None = None,
    on_failure: Callable[[Exception], None] | None = None,
) -> str | None:
    """JSON-encode ``value``; on failure call ``on_failure`` and return None."""
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as exc:
        if on_failure is not None:
            on_failure(exc)
        return None
