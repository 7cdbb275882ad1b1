"""Fixtures for gateway unit tests."""

from collections.abc import Callable

import httpx
import pytest

from actiongate.config import DockerConfig, GatewayConfig, RuntimeConfig
from actiongate.infra import DockerClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """GatewayConfig with defaults, independent of the environment."""
    return GatewayConfig(
        docker=DockerConfig(host="unix:///var/run/docker.sock", api_timeout=5.0),
        runtime=RuntimeConfig(benign_status_codes=[304]),
    )


@pytest.fixture
def make_docker_client(gateway_config: GatewayConfig) -> Callable[[Handler], DockerClient]:
    """Build a DockerClient whose requests are answered by a handler."""

    def _make(handler: Handler) -> DockerClient:
        return DockerClient(gateway_config.docker, transport=httpx.MockTransport(handler))

    return _make
