"""Pytest hooks and fixtures."""

from typing import Any

import pytest

from routerpc.config.access import clear_config_cache


class CapturingLogSink:
    """Log sink that keeps every entry for assertions."""

    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []

    def record(self, entry: dict[str, Any]) -> None:
        self.entries.append(entry)


@pytest.fixture
def log_sink() -> CapturingLogSink:
    return CapturingLogSink()


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so config files never touch the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    for key in ("ROUTERPC_SERVER__PORT", "ROUTERPC_CLIENT__BASE_URL"):
        monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield tmp_path
    clear_config_cache()
