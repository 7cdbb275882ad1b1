"""Docker runtime for the gateway."""

from actiongate.config import GatewayConfig, get_gateway_config
from actiongate.infra import ContainerAPI, DockerClient, ExecAPI
from actiongate.runtimes.docker.conflict import ConflictClassifier
from actiongate.runtimes.docker.exec import ExecRunner, ExecSession
from actiongate.runtimes.docker.power import PowerManager


class DockerRuntime:
    """Docker runtime combining power actions and exec sessions.

    Owns the single Docker API client shared by all requests.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        client: DockerClient | None = None,
    ) -> None:
        self._config = config or get_gateway_config()
        self._client = client or DockerClient(self._config.docker)

        classifier = ConflictClassifier(
            self._config.runtime.benign_status_codes,
            self._config.runtime.benign_operation_status_codes,
        )
        self.power = PowerManager(ContainerAPI(self._client), classifier)
        self.execs = ExecRunner(ExecAPI(self._client), shell=self._config.docker.shell)

    async def close(self) -> None:
        """Release the Docker API client."""
        await self._client.close()


__all__ = [
    "ConflictClassifier",
    "DockerRuntime",
    "ExecRunner",
    "ExecSession",
    "PowerManager",
]
