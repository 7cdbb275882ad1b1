"""Benign conflicts served over a real uvicorn connection."""

import socket
import threading
import time

import httpx
import pytest
import uvicorn

from actiongate.api.dependencies import get_runtime, reset_runtime
from actiongate.config import GatewayConfig
from actiongate.infra import DockerClient
from actiongate.main import app
from actiongate.runtimes import DockerRuntime

START_REQUEST = (
    b"POST /instances/abc/start HTTP/1.1\r\n"
    b"Host: gateway\r\n"
    b"Content-Length: 0\r\n"
    b"\r\n"
)


@pytest.fixture
def server_address(gateway_config: GatewayConfig) -> tuple[str, int]:
    """Serve the app with h11 against a daemon that answers every start with 304."""
    runtime = DockerRuntime(
        gateway_config,
        client=DockerClient(
            gateway_config.docker,
            transport=httpx.MockTransport(lambda request: httpx.Response(304)),
        ),
    )
    app.dependency_overrides[get_runtime] = lambda: runtime

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    server = uvicorn.Server(
        uvicorn.Config(app, http="h11", lifespan="off", log_config=None)
    )
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    thread.start()

    deadline = time.monotonic() + 5
    while not server.started:
        if time.monotonic() > deadline:
            pytest.fail("uvicorn did not start")
        time.sleep(0.01)

    yield sock.getsockname()

    server.should_exit = True
    thread.join(timeout=5)
    sock.close()
    app.dependency_overrides.clear()
    reset_runtime()


class TestNotModifiedOverHTTP:
    """A 304 must leave the connection usable for the next request."""

    def test_pipelined_requests_both_answered(self, server_address: tuple[str, int]) -> None:
        with socket.create_connection(server_address, timeout=5) as conn:
            conn.sendall(START_REQUEST * 2)
            received = b""
            while received.count(b"\r\n\r\n") < 2:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                received += chunk

        responses = received.split(b"\r\n\r\n")
        assert received.count(b"HTTP/1.1 304 Not Modified") == 2
        assert responses[-1] == b""
        assert b"x-runtime-message: container already started" in received.lower()
        assert b"content-type: application/json" not in received.lower()
