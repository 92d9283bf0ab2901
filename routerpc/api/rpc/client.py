"""HTTP client for routes served by ``wrap_rpc``."""

from __future__ import annotations

import json
from typing import Any, Callable, Literal

import httpx
from loguru import logger

from routerpc.api.rpc.common import JSONData, RpcResult
from routerpc.utils.exceptions import RPCError
from routerpc.utils.objects import UNDEFINED, omit_undefined

HttpMethod = Literal["GET", "PUT", "POST", "DELETE"]
UrlSource = str | Callable[[], str]


def _transport_error(err: RPCError) -> RPCError:
    err.transport = True
    return err


class RouteClient:
    """Reusable caller for a single RPC route."""

    def __init__(
        self,
        url: UrlSource,
        method: HttpMethod = "POST",
        timeout_seconds: float | None = None,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.method = method
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url
        self.headers = dict(headers or {})
        self.transport = transport

    def resolve_url(self) -> str:
        """Evaluate the URL for this call; suppliers are called every time."""
        url = self.url() if callable(self.url) else self.url
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    def build_request_options(self, body: JSONData | None) -> dict[str, Any]:
        return omit_undefined(
            {
                "method": self.method,
                "headers": {**self.headers, "Content-Type": "application/json"},
                "content": UNDEFINED if body is None else json.dumps(body).encode("utf-8"),
                "timeout": UNDEFINED if self.timeout_seconds is None else self.timeout_seconds * 1000,
            },
            False,
            0,
        )

    async def __call__(self, body: JSONData | None = None) -> Any:
        """Call the route; every failure is raised as an RPCError."""
        url = self.resolve_url()
        try:
            options = self.build_request_options(body)
            timeout_ms = options.pop("timeout", None)
            # httpx wants seconds; None keeps the client default.
            timeout = httpx.Timeout(timeout_ms / 1000) if timeout_ms is not None else httpx.USE_CLIENT_DEFAULT
            logger.debug("Calling RPC route {} {}", options["method"], url)
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.request(url=url, timeout=timeout, **options)
            text = response.text
            logger.debug("RPC route {} answered {}", url, response.status_code)
            if not response.is_success:
                raise self._error_from_response(url, response.status_code, text)
            return self._parse_success(response.status_code, text)
        except RPCError:
            raise
        except httpx.TransportError as exc:
            raise _transport_error(RPCError.from_any(exc)) from exc
        except Exception as exc:
            if RPCError.is_like(exc):
                raise RPCError.from_like(exc) from exc
            raise RPCError.from_any(exc) from exc

    async def try_call(self, body: JSONData | None = None) -> RpcResult:
        """Like calling the client, but returns (ok, value, error_record)."""
        try:
            return True, await self(body), None
        except RPCError as err:
            return False, None, err.to_rpc_error_data(omit_stack=True)

    @staticmethod
    def _error_from_response(url: str, status_code: int, text: str) -> RPCError:
        if status_code == 404:
            return RPCError(f"url not found: {url}", 404, text)
        try:
            parsed = json.loads(text)
        except ValueError as exc:
            return _transport_error(
                RPCError(
                    f"Malformed error response (HTTP {status_code})",
                    status_code,
                    {"responseText": text, "parseError": str(exc)},
                )
            )
        record = RPCError.as_record(parsed)
        if record is None:
            return RPCError.from_any(parsed, code=status_code)
        err = RPCError.from_rpc_error_data(record)
        if err.code is None:
            err.code = status_code
        return err

    @staticmethod
    def _parse_success(status_code: int, text: str) -> Any:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise _transport_error(
                RPCError(
                    f"Malformed JSON response (HTTP {status_code})",
                    None,
                    {"responseText": text, "parseError": str(exc)},
                )
            ) from exc


def create_route_client(
    url: UrlSource,
    method: HttpMethod = "POST",
    timeout_seconds: float | None = None,
    **kwargs: Any,
) -> RouteClient:
    """Create a reusable RPC client for a particular route."""
    return RouteClient(url, method, timeout_seconds, **kwargs)
