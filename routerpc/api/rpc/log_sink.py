"""Log sinks for failed RPC route invocations."""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger

from routerpc.utils.objects import safe_stringify


class RpcLogSink(Protocol):
    """Anything that accepts one structured entry per failed call."""

    def record(self, entry: dict[str, Any]) -> None: ...


class LoguruLogSink:
    """Default sink: writes the entry through loguru at error level."""

    def __init__(self, level: str = "ERROR") -> None:
        self.level = level

    def record(self, entry: dict[str, Any]) -> None:
        rendered = safe_stringify(
            entry,
            on_failure=lambda exc: logger.debug("RPC error entry is not JSON-serializable: {}", exc),
        )
        logger.bind(rpc=entry).log(
            self.level,
            "RPC {} {} failed: {}",
            entry.get("method"),
            entry.get("url"),
            rendered if rendered is not None else repr(entry),
        )
