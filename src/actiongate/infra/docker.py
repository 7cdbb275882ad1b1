"""Docker Engine API client for the gateway.

Provides async Docker API access for container lifecycle and exec.
Supports both Unix socket and TCP connections.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx
from pydantic import BaseModel

from actiongate.config import DockerConfig

logger = logging.getLogger(__name__)

# Docker answers some lifecycle calls with an empty body (304 in particular).
# Wording follows the Docker client libraries.
_EMPTY_BODY_MESSAGES: dict[tuple[str, int], str] = {
    ("start", 304): "container already started",
    ("stop", 304): "container already stopped",
    ("start", 404): "no such container",
    ("stop", 404): "no such container",
    ("restart", 404): "no such container",
    ("pause", 404): "no such container",
    ("unpause", 404): "no such container",
    ("kill", 404): "no such container",
    ("kill", 409): "container is not running",
    ("exec_create", 404): "no such container",
    ("exec_create", 409): "container is paused",
    ("exec_start", 404): "no such exec instance",
    ("exec_start", 409): "container stopped/paused",
}


class DockerAPIError(Exception):
    """Non-2xx response from the Docker daemon.

    Attributes:
        status_code: HTTP status returned by the daemon.
        message: Daemon-supplied message, or a fallback when the body is empty.
        operation: Name of the API operation that failed.
    """

    def __init__(self, status_code: int, message: str, operation: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.operation = operation
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response, operation: str) -> DockerAPIError:
        """Build from a daemon response whose body has been read."""
        message = ""
        if response.content:
            try:
                data = response.json()
            except ValueError:
                message = response.text.strip()
            else:
                if isinstance(data, dict):
                    message = str(data.get("message", ""))
        if not message:
            message = _EMPTY_BODY_MESSAGES.get(
                (operation, response.status_code), response.reason_phrase
            )
        return cls(response.status_code, message, operation)


# =============================================================================
# Pydantic Models
# =============================================================================


class ExecConfig(BaseModel):
    """Docker exec configuration for creation."""

    cmd: list[str]
    attach_stdout: bool = True
    attach_stderr: bool = True
    tty: bool = True

    model_config = {"frozen": True}

    def to_api(self) -> dict:
        """Convert to Docker API JSON format."""
        return {
            "Cmd": self.cmd,
            "AttachStdout": self.attach_stdout,
            "AttachStderr": self.attach_stderr,
            "Tty": self.tty,
        }


# =============================================================================
# Docker Client
# =============================================================================


class DockerClient:
    """Async Docker API client.

    One instance is created at startup and shared by every request.
    """

    def __init__(
        self,
        config: DockerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> DockerConfig:
        return self._config

    def _create_client(self) -> httpx.AsyncClient:
        """Create a new HTTP client."""
        host = self._config.host
        timeout = self._config.api_timeout
        if self._transport is not None:
            return httpx.AsyncClient(
                transport=self._transport,
                base_url="http://localhost",
                timeout=timeout,
            )
        if host.startswith("unix://"):
            transport = httpx.AsyncHTTPTransport(uds=host.removeprefix("unix://"))
            return httpx.AsyncClient(
                transport=transport,
                base_url="http://localhost",
                timeout=timeout,
            )
        base_url = host
        if base_url.startswith("tcp://"):
            base_url = base_url.replace("tcp://", "http://", 1)
        return httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def get(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = self._create_client()
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


# =============================================================================
# Container API
# =============================================================================


class ContainerAPI:
    """Docker container lifecycle operations.

    Every method raises DockerAPIError when the daemon answers with a
    non-2xx status, 304 included.
    """

    def __init__(self, client: DockerClient) -> None:
        self._docker = client

    async def _post(self, container_id: str, operation: str) -> None:
        client = await self._docker.get()
        resp = await client.post(f"/containers/{container_id}/{operation}")
        if resp.status_code >= 300:
            raise DockerAPIError.from_response(resp, operation)
        logger.debug("Container %s: %s", operation, container_id)

    async def start(self, container_id: str) -> None:
        """Start a container."""
        await self._post(container_id, "start")

    async def stop(self, container_id: str) -> None:
        """Stop a container."""
        await self._post(container_id, "stop")

    async def restart(self, container_id: str) -> None:
        """Restart a container."""
        await self._post(container_id, "restart")

    async def pause(self, container_id: str) -> None:
        """Pause all processes in a container."""
        await self._post(container_id, "pause")

    async def unpause(self, container_id: str) -> None:
        """Resume a paused container."""
        await self._post(container_id, "unpause")

    async def kill(self, container_id: str) -> None:
        """Send the default kill signal to a container."""
        await self._post(container_id, "kill")


# =============================================================================
# Exec API
# =============================================================================


class ExecStream:
    """Attached output of a started exec instance.

    With a TTY the daemon sends a raw stream, stdout and stderr already
    merged in emission order.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield output chunks until the daemon closes the stream."""
        async for chunk in self._response.aiter_raw():
            if chunk:
                yield chunk

    async def close(self) -> None:
        await self._response.aclose()


class ExecAPI:
    """Docker exec operations."""

    def __init__(self, client: DockerClient) -> None:
        self._docker = client

    async def create(self, container_id: str, config: ExecConfig) -> str:
        """Create an exec instance and return its ID."""
        client = await self._docker.get()
        resp = await client.post(f"/containers/{container_id}/exec", json=config.to_api())
        if resp.status_code >= 300:
            raise DockerAPIError.from_response(resp, "exec_create")
        try:
            exec_id = str(resp.json()["Id"])
        except (ValueError, KeyError, TypeError) as e:
            raise DockerAPIError(
                resp.status_code, "invalid exec create response", "exec_create"
            ) from e
        logger.debug("Created exec %s in container %s", exec_id, container_id)
        return exec_id

    async def start(self, exec_id: str, tty: bool = True) -> ExecStream:
        """Start an exec instance attached and return its output stream.

        The caller owns the returned stream and must close it.
        """
        client = await self._docker.get()
        timeout = httpx.Timeout(
            self._docker.config.api_timeout,
            read=self._docker.config.exec_read_timeout,
        )
        request = client.build_request(
            "POST",
            f"/exec/{exec_id}/start",
            json={"Detach": False, "Tty": tty},
            timeout=timeout,
        )
        resp = await client.send(request, stream=True)
        if resp.status_code >= 300:
            try:
                await resp.aread()
                raise DockerAPIError.from_response(resp, "exec_start")
            finally:
                await resp.aclose()
        return ExecStream(resp)
