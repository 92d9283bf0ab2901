"""Configuration schema using Pydantic.

Single data model and defaults for routerpc, persisted to ~/.routerpc/config.json.
"""

from typing import Literal

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import BaseSettings


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 18800
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    # Mount the demo /api/hello route.
    hello_route: bool = True


class ClientConfig(BaseModel):
    """Defaults for route clients created by the CLI."""
    base_url: str = "http://127.0.0.1:18800"
    method: Literal["GET", "POST", "PUT", "DELETE"] = "POST"
    timeout_seconds: float | None = None  # None = transport default


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file_enabled: bool = False  # Rotating file under ~/.routerpc/logs


class Config(BaseSettings):
    """Root configuration for routerpc."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def server_url(self) -> str:
        """URL of the local server; a wildcard bind host is reached over loopback."""
        host = self.server.host
        if host in {"0.0.0.0", "::"}:
            host = "127.0.0.1"
        return f"http://{host}:{self.server.port}"

    model_config = ConfigDict(
        env_prefix="ROUTERPC_",
        env_nested_delimiter="__"
    )
