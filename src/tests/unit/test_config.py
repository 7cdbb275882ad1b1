"""Tests for gateway configuration."""

import pytest

from actiongate.config import DockerConfig, GatewayConfig, RuntimeConfig


class TestGatewayConfig:
    """Tests for GatewayConfig defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GATEWAY_DOCKER_HOST", raising=False)
        monkeypatch.delenv("GATEWAY_RUNTIME_BENIGN_STATUS_CODES", raising=False)

        config = GatewayConfig()

        assert config.docker.host == "unix:///var/run/docker.sock"
        assert config.docker.exec_read_timeout is None
        assert config.docker.shell == "sh"
        assert config.runtime.benign_status_codes == [304]
        assert config.server.port == 8080

    def test_docker_host_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GATEWAY_DOCKER_HOST", "unix:///run/user/1000/docker.sock")

        assert DockerConfig().host == "unix:///run/user/1000/docker.sock"

    def test_benign_codes_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GATEWAY_RUNTIME_BENIGN_STATUS_CODES", "[304, 409]")

        assert RuntimeConfig().benign_status_codes == [304, 409]

    def test_repeated_pause_unpause_benign_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GATEWAY_RUNTIME_BENIGN_OPERATION_STATUS_CODES", raising=False)

        codes = RuntimeConfig().benign_operation_status_codes

        assert codes == {"pause": [409], "unpause": [409]}
        assert "kill" not in codes

    def test_operation_codes_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "GATEWAY_RUNTIME_BENIGN_OPERATION_STATUS_CODES", '{"pause": [409, 423]}'
        )

        assert RuntimeConfig().benign_operation_status_codes == {"pause": [409, 423]}
