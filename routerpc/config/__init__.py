"""Configuration module for routerpc."""

from routerpc.config.loader import load_config, save_config, get_config_path
from routerpc.config.schema import Config
from routerpc.config.access import get_config, clear_config_cache

__all__ = ["Config", "load_config", "save_config", "get_config_path", "get_config", "clear_config_cache"]
