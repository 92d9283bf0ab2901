"""Process-wide config access for the server and the CLI."""

from __future__ import annotations

import threading
from pathlib import Path

from routerpc.config.loader import get_config_path, load_config
from routerpc.config.schema import Config


class ConfigCache:
    """Loads each config file once; overrides win over files."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[Path, Config] = {}

    @staticmethod
    def key(config_path: Path | None) -> Path:
        return Path(config_path or get_config_path()).expanduser().resolve()

    def get(self, config_path: Path | None = None, *, force_reload: bool = False) -> Config:
        key = self.key(config_path)
        with self._lock:
            if force_reload or key not in self._entries:
                self._entries[key] = load_config(key)
            return self._entries[key]

    def put(self, config: Config, config_path: Path | None = None) -> None:
        with self._lock:
            self._entries[self.key(config_path)] = config

    def clear(self, config_path: Path | None = None) -> None:
        with self._lock:
            if config_path is None:
                self._entries.clear()
            else:
                self._entries.pop(self.key(config_path), None)


_cache = ConfigCache()


def get_config(*, config_path: Path | None = None, force_reload: bool = False) -> Config:
    """Get config with process-local cache and optional refresh."""
    return _cache.get(config_path, force_reload=force_reload)


def override_config(config: Config, *, config_path: Path | None = None) -> None:
    """Serve ``config`` for ``config_path`` without reading the file."""
    _cache.put(config, config_path)


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Clear cached config entry (or all cache entries)."""
    _cache.clear(config_path)
