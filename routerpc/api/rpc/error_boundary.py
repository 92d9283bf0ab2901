"""Common RPC error-boundary helpers for route invocation."""

from __future__ import annotations

from typing import Any

from loguru import logger

from routerpc.api.rpc.common import RpcRequest
from routerpc.api.rpc.log_sink import RpcLogSink
from routerpc.api.rpc.request_context import resolve_client_address, resolve_user_agent
from routerpc.api.rpc.response import ResponseEmitter
from routerpc.utils.exceptions import RPCError, RPCErrorData
from routerpc.utils.objects import UNDEFINED, omit_undefined

SERVER_ERROR_MESSAGE = "A server error occurred"
SERVER_ERROR_STATUS = 500

ErrorResult = tuple[int, RPCErrorData]


def normalize_route_error(exc: BaseException) -> RPCError:
    """Map anything raised by a route to a canonical RPCError."""
    if RPCError.is_like(exc):
        return RPCError.from_like(exc)
    err = RPCError.from_any(exc)
    if not err.message:
        err.message = SERVER_ERROR_MESSAGE
    return err


def error_status(err: RPCError) -> int:
    code = err.code
    if isinstance(code, int) and not isinstance(code, bool) and 100 <= code <= 599:
        return code
    return SERVER_ERROR_STATUS


def build_error_log_entry(request: RpcRequest, err: RPCError) -> dict[str, Any]:
    """Structured log entry for a failed route; keeps the stack."""
    record = dict(err.to_rpc_error_data(omit_stack=False))
    record.setdefault("code", error_status(err))
    return omit_undefined(
        {
            "clientAddress": resolve_client_address(request) or UNDEFINED,
            "userAgent": resolve_user_agent(request) or UNDEFINED,
            "method": request.method if request.method is not None else UNDEFINED,
            "url": request.url,
            "body": UNDEFINED if request.body is None else request.body,
            "query": request.query,
            **record,
        },
        False,
        0,
    )


def error_response_result(err: RPCError) -> ErrorResult:
    """Status and client-facing record; the stack never leaves the server."""
    return error_status(err), err.to_rpc_error_data(omit_stack=True)


def respond_with_error(
    *,
    request: RpcRequest,
    exc: BaseException,
    response: ResponseEmitter,
    log_sink: RpcLogSink,
) -> RPCError:
    """Normalize, record and emit a route failure. Always emits a response."""
    err = normalize_route_error(exc)
    try:
        log_sink.record(build_error_log_entry(request, err))
    except Exception:
        logger.exception("RPC log sink failed for {} {}", request.method, request.url)
    status, record = error_response_result(err)
    response.set_status(status)
    try:
        response.send_json(record)
    except (TypeError, ValueError):
        # Opaque data that cannot be encoded is dropped from the response.
        record.pop("data", None)
        response.send_json(record)
    return err
