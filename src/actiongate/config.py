"""Gateway configuration using pydantic-settings.

Configuration hierarchy:
- DockerConfig: Container runtime connection
- RuntimeConfig: Runtime behavior (error classification)
- LoggingConfig: Logging behavior
- ServerConfig: HTTP server settings
- GatewayConfig: Main config aggregating all sub-configs

Environment variable prefix: GATEWAY_
Example: GATEWAY_DOCKER_HOST=unix:///run/user/1000/docker.sock
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DockerConfig(BaseSettings):
    """Docker runtime connection configuration."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_DOCKER_")

    host: str = Field(
        default="unix:///var/run/docker.sock",
        description="Docker daemon socket or TCP address",
    )
    api_timeout: float = Field(default=30.0, description="Docker API call timeout (seconds)")
    exec_read_timeout: float | None = Field(
        default=None,
        description="Read timeout for exec output streams (None = wait for the runtime)",
    )
    shell: str = Field(default="sh", description="Shell used to run scripts and commands")


class RuntimeConfig(BaseSettings):
    """Runtime behavior configuration."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_RUNTIME_")

    # Docker answers 304 when a container is already started or stopped
    benign_status_codes: list[int] = Field(
        default=[304],
        description="Runtime status codes reported as benign conflicts for every action",
    )
    # ...and 409 for a repeated pause/unpause, which kill also uses for real failures
    benign_operation_status_codes: dict[str, list[int]] = Field(
        default={"pause": [409], "unpause": [409]},
        description="Runtime status codes reported as benign conflicts for one action only",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="GATEWAY_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(
        default="container-action-gateway",
        description="Service identifier in logs",
    )


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_SERVER_")

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    prefix: str = Field(default="", description="Mount prefix for the instance router")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )


class GatewayConfig(BaseSettings):
    """Main gateway configuration aggregating all sub-configs.

    Environment variable prefix: GATEWAY_
    Sub-configs use their own prefixes (GATEWAY_DOCKER_, GATEWAY_LOGGING_, etc.)
    """

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_nested_delimiter="__",
    )

    docker: DockerConfig = Field(default_factory=DockerConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


@lru_cache
def get_gateway_config() -> GatewayConfig:
    """Get cached gateway configuration singleton."""
    return GatewayConfig()
