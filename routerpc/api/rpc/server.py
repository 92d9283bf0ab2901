"""Turn plain handler functions into JSON HTTP routes."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, APIRouter
from loguru import logger
from starlette.requests import Request
from starlette.responses import Response

from routerpc.api.rpc.common import ALLOWED_METHODS, RouteContext, RouteHandler, RpcRequest
from routerpc.api.rpc.error_boundary import respond_with_error
from routerpc.api.rpc.log_sink import LoguruLogSink, RpcLogSink
from routerpc.api.rpc.request_context import decode_json_body, describe_request
from routerpc.api.rpc.response import BufferedResponse, ResponseEmitter
from routerpc.utils.exceptions import RPCError
from routerpc.utils.promises import unpromise

# Every verb listed here is routed to the wrapper so that it answers 405 itself.
# HEAD and unlisted verbs get the framework's own 405 ({"detail": ...}).
ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]

Endpoint = Callable[[Request], Awaitable[Response]]


def reject_method(request: RpcRequest, response: ResponseEmitter) -> bool:
    """Answer 400 or 405 for a missing or unsupported method; True if answered."""
    if not isinstance(request.method, str) or not request.method:
        response.set_status(400).send_raw("Missing request method")
        return True
    if request.method not in ALLOWED_METHODS:
        response.set_status(405).send_raw("Method Not Allowed")
        return True
    return False


async def run_rpc_route(
    handler: RouteHandler,
    request: RpcRequest,
    response: ResponseEmitter,
    log_sink: RpcLogSink,
) -> None:
    """Invoke ``handler`` for one request and write exactly one response."""
    if reject_method(request, response):
        return
    try:
        result = await unpromise(
            handler(RouteContext(body=request.body, query=request.query, request=request))
        )
        if result is None:
            response.set_status(204).send_empty()
            return
        response.set_status(200).send_json(result)
    except Exception as exc:
        respond_with_error(request=request, exc=exc, response=response, log_sink=log_sink)


def wrap_rpc(handler: RouteHandler, *, log_sink: RpcLogSink | None = None) -> Endpoint:
    """
    Build a Starlette/FastAPI endpoint around ``handler``.

    The handler receives a RouteContext and may be sync or async. A None
    result answers 204, anything else answers 200 with the JSON-encoded
    value, and failures answer with the RPCError record minus its stack.
    """
    sink = log_sink or LoguruLogSink()

    async def endpoint(request: Request) -> Response:
        rpc_request = describe_request(request)
        response = BufferedResponse()
        if reject_method(rpc_request, response):
            return response.to_starlette()
        try:
            rpc_request.body = decode_json_body(await request.body())
        except RPCError as exc:
            respond_with_error(request=rpc_request, exc=exc, response=response, log_sink=sink)
            return response.to_starlette()
        await run_rpc_route(handler, rpc_request, response, sink)
        return response.to_starlette()

    endpoint.__name__ = getattr(handler, "__name__", "rpc_route")
    endpoint.__doc__ = getattr(handler, "__doc__", None)
    return endpoint


def mount_rpc_route(
    app: FastAPI | APIRouter,
    path: str,
    handler: RouteHandler,
    *,
    log_sink: RpcLogSink | None = None,
    **route_kwargs: Any,
) -> Endpoint:
    """Register a wrapped handler on ``app`` for every HTTP verb."""
    endpoint = wrap_rpc(handler, log_sink=log_sink)
    route_kwargs.setdefault("include_in_schema", False)
    app.add_api_route(path, endpoint, methods=ROUTED_METHODS, **route_kwargs)
    logger.debug("Mounted RPC route {} -> {}", path, endpoint.__name__)
    return endpoint
