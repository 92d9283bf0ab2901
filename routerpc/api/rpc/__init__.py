"""RPC boundary: wrapped server routes and matching route clients."""

from routerpc.api.rpc.client import RouteClient, create_route_client
from routerpc.api.rpc.common import RouteContext, RpcRequest, RpcResult
from routerpc.api.rpc.log_sink import LoguruLogSink, RpcLogSink
from routerpc.api.rpc.response import BufferedResponse, ResponseEmitter
from routerpc.api.rpc.server import mount_rpc_route, run_rpc_route, wrap_rpc

__all__ = [
    "RouteClient",
    "create_route_client",
    "RouteContext",
    "RpcRequest",
    "RpcResult",
    "LoguruLogSink",
    "RpcLogSink",
    "BufferedResponse",
    "ResponseEmitter",
    "mount_rpc_route",
    "run_rpc_route",
    "wrap_rpc",
]
