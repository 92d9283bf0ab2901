"""Loguru setup shared by CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from routerpc.config.loader import get_data_dir

_SINK_IDS: dict[str, int] = {}
_CONSOLE_SINK_ID: int | None = None


def configure_console_logging(level: str = "INFO") -> None:
    """Replace the default stderr sink with one at ``level``."""
    global _CONSOLE_SINK_ID
    if _CONSOLE_SINK_ID is None:
        logger.remove()
    else:
        logger.remove(_CONSOLE_SINK_ID)
    _CONSOLE_SINK_ID = logger.add(sys.stderr, level=level.upper())


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_path = get_data_dir() / "logs" / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _SINK_IDS[name] = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    return log_path
