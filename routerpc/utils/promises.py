"""Helpers for values that may or may not be awaitable."""

from __future__ import annotations

import inspect
from typing import Awaitable, TypeVar

T = TypeVar("T")


async def unpromise(value_or_awaitable: T | Awaitable[T]) -> T:
    """Resolve a plain value or an awaitable to its eventual result."""
    if inspect.isawaitable(value_or_awaitable):
        return await value_or_awaitable
    return value_or_awaitable  # type: ignore[return-value]
