"""
Error model shared by RPC routes and RPC clients.

Provides:
- RPCError, the single error type seen on both sides of the wire
- RPCErrorData, the JSON record an RPCError serializes to
- Structural (is_like) and identity (is_instance) classification
- Conversion from records, other errors and arbitrary values
- Error categorization (client, server, transport)
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal, NotRequired, TypedDict

from routerpc.utils.objects import UNDEFINED, omit_undefined

ERROR_NAME = "RPCError"
UNKNOWN_ERROR_MESSAGE = "Unknown Error"


class RPCErrorData(TypedDict):
    """Plain data carried by every RPCError; what goes over the wire."""

    name: Literal["RPCError"]
    message: str
    stack: NotRequired[str]
    code: NotRequired[int]
    data: NotRequired[Any]


class ErrorCategory(Enum):
    """Error categories for classification."""
    CLIENT = "client"
    SERVER = "server"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, UNDEFINED)
    return getattr(obj, key, UNDEFINED)


def _has_field(obj: Any, key: str) -> bool:
    if isinstance(obj, Mapping):
        return key in obj
    return hasattr(obj, key)


def _format_stack(exc: BaseException) -> str | None:
    if exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _exception_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)


class RPCError(Exception):
    """Error raised by RPC handlers and by RPC clients."""

    def __init__(self, message: str, code: int | None = None, data: Any = None):
        super().__init__(message)
        self.name: Literal["RPCError"] = ERROR_NAME
        self.message = message
        self.code = code
        self.data = data
        self._stack: str | None = None
        self.transport = False

    @property
    def stack(self) -> str | None:
        """Explicit stack if one was carried over, else this error's own traceback."""
        if self._stack is not None:
            return self._stack
        return _format_stack(self)

    @stack.setter
    def stack(self, value: str | None) -> None:
        self._stack = value

    @property
    def category(self) -> ErrorCategory:
        return classify_error(self)

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"RPCError(message={self.message!r}, code={self.code!r}, data={self.data!r})"

    # -- classification -------------------------------------------------

    @staticmethod
    def is_like(value: Any) -> bool:
        """True if ``value`` has the RPCError shape, whatever its type."""
        if value is None or isinstance(value, (str, bytes, int, float, bool)):
            return False
        if not _has_field(value, "name") or not _has_field(value, "message"):
            return False
        if _field(value, "name") != ERROR_NAME:
            return False
        stack = _field(value, "stack")
        return stack is UNDEFINED or stack is None or isinstance(stack, str)

    @staticmethod
    def is_instance(value: Any) -> bool:
        return isinstance(value, RPCError)

    @classmethod
    def as_record(cls, value: Any) -> RPCErrorData | None:
        """Typed view of an error-shaped value, or None if it is not one."""
        if not cls.is_like(value):
            return None
        if isinstance(value, RPCError):
            return value.to_rpc_error_data(omit_stack=False)
        record = {
            "name": ERROR_NAME,
            "message": _field(value, "message"),
            "code": _field(value, "code"),
            "data": _field(value, "data"),
            "stack": _field(value, "stack"),
        }
        if record["stack"] is None:
            record["stack"] = UNDEFINED
        return omit_undefined(record, False, 0)

    # -- construction ---------------------------------------------------

    @classmethod
    def from_rpc_error(cls, err: RPCError) -> RPCError:
        """Copy an existing instance, keeping its transport flag and stack."""
        result = cls(err.message, err.code, err.data)
        result.transport = err.transport
        stack = err.stack
        if stack:
            result.stack = stack
        return result

    @classmethod
    def from_rpc_error_data(cls, record: Any) -> RPCError:
        """Build an instance from a deserialized record (mapping or object)."""
        code = _field(record, "code")
        data = _field(record, "data")
        result = cls(
            str(_field(record, "message")),
            None if code is UNDEFINED else code,
            None if data is UNDEFINED else data,
        )
        stack = _field(record, "stack")
        if isinstance(stack, str) and stack:
            result.stack = stack
        return result

    @classmethod
    def from_like(cls, value: Any) -> RPCError:
        if isinstance(value, RPCError):
            return cls.from_rpc_error(value)
        return cls.from_rpc_error_data(value)

    @classmethod
    def from_error(cls, exc: BaseException, *, code: int | None = None, data: Any = None) -> RPCError:
        result = cls(_exception_message(exc), code, data)
        stack = _format_stack(exc)
        if stack:
            result.stack = stack
        return result

    @classmethod
    def from_any(cls, value: Any, *, message: str | None = None, code: int | None = None) -> RPCError:
        """Normalize anything that was caught or received into an RPCError."""
        if isinstance(value, BaseException):
            result = cls.from_error(value, code=code)
            if isinstance(message, str):
                result.message = message
                result.args = (message,)
            return result
        return cls(message if message is not None else UNKNOWN_ERROR_MESSAGE, code, value)

    # -- serialization --------------------------------------------------

    def to_rpc_error_data(self, omit_stack: bool = False) -> RPCErrorData:
        """Wire record; with ``omit_stack`` the stack key is never present."""
        return omit_undefined(
            {
                "name": self.name,
                "message": self.message,
                "code": UNDEFINED if self.code is None else self.code,
                "data": UNDEFINED if self.data is None else self.data,
                "stack": UNDEFINED if omit_stack or self.stack is None else self.stack,
            },
            False,
            0,
        )


def classify_error(err: RPCError) -> ErrorCategory:
    """Place an RPCError in the client / server / transport taxonomy."""
    if err.transport:
        return ErrorCategory.TRANSPORT
    code = err.code
    if isinstance(code, int) and not isinstance(code, bool):
        if 400 <= code < 500:
            return ErrorCategory.CLIENT
        if code >= 500:
            return ErrorCategory.SERVER
    return ErrorCategory.UNKNOWN
