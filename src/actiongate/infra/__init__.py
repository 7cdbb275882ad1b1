"""Gateway infrastructure layer."""

from actiongate.infra.docker import (
    ContainerAPI,
    DockerAPIError,
    DockerClient,
    ExecAPI,
    ExecConfig,
    ExecStream,
)

__all__ = [
    "ContainerAPI",
    "DockerAPIError",
    "DockerClient",
    "ExecAPI",
    "ExecConfig",
    "ExecStream",
]
