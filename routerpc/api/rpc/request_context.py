"""Adapters between Starlette requests and RPC request descriptors."""

from __future__ import annotations

import json
from typing import Any

from starlette.datastructures import QueryParams
from starlette.requests import Request

from routerpc.api.rpc.common import QueryValue, RpcRequest
from routerpc.utils.exceptions import RPCError


def resolve_client_address(request: RpcRequest) -> str | None:
    """Client address from x-forwarded-for, falling back to the socket peer."""
    forwarded = request.header("x-forwarded-for")
    if forwarded:
        return forwarded
    return request.remote_address


def resolve_user_agent(request: RpcRequest) -> str | None:
    return request.header("user-agent")


def query_to_dict(query_params: QueryParams, path_params: dict[str, Any] | None = None) -> dict[str, QueryValue]:
    """Flatten query params: single values stay strings, repeated keys become lists."""
    query: dict[str, QueryValue] = {}
    for key in query_params.keys():
        values = query_params.getlist(key)
        query[key] = values[0] if len(values) == 1 else list(values)
    for key, value in (path_params or {}).items():
        query[key] = str(value)
    return query


def decode_json_body(raw: bytes) -> Any:
    """Decode a request body; empty means no body."""
    if not raw or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RPCError("Invalid JSON body", 400, {"reason": str(exc)}) from exc


def describe_request(request: Request) -> RpcRequest:
    """Describe a Starlette request without decoding its body."""
    client = request.client
    return RpcRequest(
        method=request.method or None,
        url=str(request.url),
        headers={k.lower(): v for k, v in request.headers.items()},
        remote_address=client.host if client else None,
        body=None,
        query=query_to_dict(request.query_params, dict(request.path_params)),
    )
