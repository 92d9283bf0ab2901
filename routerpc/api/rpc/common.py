"""Shared types for RPC routes and RPC clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Union

from routerpc.utils.exceptions import RPCErrorData

JSONPrimitive = Union[str, int, float, bool, None]
JSONData = Union[JSONPrimitive, list["JSONData"], dict[str, "JSONData"]]

RouteBody = Any
RouteReturn = Any

RpcResult = tuple[bool, Any | None, RPCErrorData | None]

ALLOWED_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE")

QueryValue = Union[str, list[str]]


@dataclass(slots=True)
class RpcRequest:
    """Request descriptor handed over by the host framework."""

    method: str | None
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    remote_address: str | None = None
    body: RouteBody = None
    query: dict[str, QueryValue] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        value = self.headers.get(name.lower())
        if value is None:
            return None
        return str(value)


@dataclass(slots=True)
class RouteContext:
    """What a route handler receives for one invocation."""

    body: RouteBody
    query: dict[str, QueryValue]
    request: RpcRequest


RouteHandler = Callable[[RouteContext], Union[RouteReturn, Awaitable[RouteReturn]]]
