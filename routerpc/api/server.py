"""FastAPI application hosting wrapped RPC routes.

Routes are plain handler functions registered through ``mount_rpc_route``; the
application itself only adds CORS and the optional demo route.
"""

from __future__ import annotations

from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from routerpc import __version__
from routerpc.api.rpc.common import RouteContext, RouteHandler
from routerpc.api.rpc.log_sink import RpcLogSink
from routerpc.api.rpc.server import mount_rpc_route
from routerpc.config.schema import Config

HELLO_PATH = "/api/hello"


async def hello(ctx: RouteContext) -> str:
    """Demo route: always greets."""
    return "Hello, World!"


def create_app(
    config: Config | None = None,
    *,
    routes: Iterable[tuple[str, RouteHandler]] = (),
    log_sink: RpcLogSink | None = None,
) -> FastAPI:
    """Build the application and mount ``routes`` as (path, handler) pairs."""
    cfg = config or Config()
    app = FastAPI(title="routerpc", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if cfg.server.hello_route:
        mount_rpc_route(app, HELLO_PATH, hello, log_sink=log_sink)
    for path, handler in routes:
        mount_rpc_route(app, path, handler, log_sink=log_sink)
    logger.info("routerpc app ready with {} routes", len(app.routes))
    return app


def run_server(config: Config, host: str | None = None, port: int | None = None) -> None:
    """Serve ``create_app(config)`` with uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
        log_level=config.logging.level.lower(),
    )
