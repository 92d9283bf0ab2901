"""Utility functions for routerpc."""

from routerpc.utils.objects import UNDEFINED, is_undefined, omit_undefined, safe_stringify
from routerpc.utils.promises import unpromise
from routerpc.utils.exceptions import (
    RPCError,
    RPCErrorData,
    ErrorCategory,
    classify_error,
)

__all__ = [
    "UNDEFINED",
    "is_undefined",
    "omit_undefined",
    "safe_stringify",
    "unpromise",
    "RPCError",
    "RPCErrorData",
    "ErrorCategory",
    "classify_error",
]
