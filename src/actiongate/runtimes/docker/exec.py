"""Docker exec runner for the gateway.

Runs inline shell text inside a container with a TTY attached and
collects everything it prints into one string.
"""

from __future__ import annotations

import codecs
import logging

import httpx

from actiongate.infra import DockerAPIError, ExecAPI, ExecConfig
from actiongate.logging_schema import LogEvent
from actiongate.metrics import (
    GATEWAY_DOCKER_DURATION,
    GATEWAY_DOCKER_ERRORS,
    GATEWAY_EXEC_OUTPUT_BYTES,
)
from actiongate.runtimes.docker.result import ExecKind, ExecResult, ExecState

logger = logging.getLogger(__name__)

_TRANSITIONS: dict[ExecState, frozenset[ExecState]] = {
    ExecState.CREATED: frozenset({ExecState.STARTED, ExecState.FAILED}),
    ExecState.STARTED: frozenset({ExecState.STREAMING}),
    ExecState.STREAMING: frozenset({ExecState.COMPLETED, ExecState.FAILED}),
    ExecState.COMPLETED: frozenset(),
    ExecState.FAILED: frozenset(),
}


class InvalidExecTransitionError(RuntimeError):
    """Raised when an exec session is moved along an edge it does not have."""


def _error_text(exc: Exception) -> str:
    if isinstance(exc, DockerAPIError):
        return exc.message
    return str(exc) or type(exc).__name__


class ExecSession:
    """State machine for one exec request.

    Output accumulates while streaming. Once the session reaches a
    terminal state it refuses every further transition, so it yields
    exactly one ExecResult.
    """

    def __init__(self, container_id: str, kind: ExecKind, name: str) -> None:
        self.container_id = container_id
        self.kind = kind
        self.name = name
        self._state = ExecState.CREATED
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._parts: list[str] = []
        self._bytes = 0

    @property
    def state(self) -> ExecState:
        return self._state

    @property
    def output(self) -> str:
        return "".join(self._parts)

    @property
    def bytes_received(self) -> int:
        return self._bytes

    def _transition(self, target: ExecState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidExecTransitionError(
                f"exec session cannot move from {self._state.value} to {target.value}"
            )
        self._state = target

    def mark_started(self) -> None:
        self._transition(ExecState.STARTED)

    def begin_streaming(self) -> None:
        self._transition(ExecState.STREAMING)

    def append(self, chunk: bytes) -> None:
        """Decode and append one chunk of output."""
        if self._state != ExecState.STREAMING:
            raise InvalidExecTransitionError(
                f"exec session cannot accept output while {self._state.value}"
            )
        self._bytes += len(chunk)
        text = self._decoder.decode(chunk)
        if text:
            self._parts.append(text)

    def complete(self) -> ExecResult:
        self._transition(ExecState.COMPLETED)
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._parts.append(tail)
        return ExecResult(
            kind=self.kind, name=self.name, state=self._state, output=self.output
        )

    def fail(self, error: str) -> ExecResult:
        self._transition(ExecState.FAILED)
        self._parts.clear()
        return ExecResult(kind=self.kind, name=self.name, state=self._state, error=error)


class ExecRunner:
    """Runs shell text inside containers through the exec API."""

    def __init__(self, execs: ExecAPI, shell: str = "sh") -> None:
        self._execs = execs
        self._shell = shell

    async def run(
        self, container_id: str, kind: ExecKind, name: str, text: str
    ) -> ExecResult:
        """Execute text in a container and wait for its output stream to end.

        Never raises for runtime failures: they come back as a FAILED result.
        """
        session = ExecSession(container_id, kind, name)
        extra = {"container": container_id, "kind": kind.value, "exec_name": name}
        config = ExecConfig(cmd=[self._shell, "-c", text])

        step = "exec_create"
        try:
            with GATEWAY_DOCKER_DURATION.labels(operation=step).time():
                exec_id = await self._execs.create(container_id, config)
            step = "exec_start"
            with GATEWAY_DOCKER_DURATION.labels(operation=step).time():
                stream = await self._execs.start(exec_id, tty=config.tty)
        except (DockerAPIError, httpx.HTTPError) as e:
            error_type = "api_error" if isinstance(e, DockerAPIError) else "connection"
            GATEWAY_DOCKER_ERRORS.labels(operation=step, error_type=error_type).inc()
            result = session.fail(_error_text(e))
            logger.warning(
                "Exec could not be started",
                extra={
                    **extra,
                    "event": LogEvent.EXEC_FAILED,
                    "step": step,
                    "error": result.error,
                },
            )
            return result

        session.mark_started()
        logger.debug("Exec started", extra={**extra, "event": LogEvent.EXEC_STARTED})

        session.begin_streaming()
        try:
            with GATEWAY_DOCKER_DURATION.labels(operation="exec_stream").time():
                async for chunk in stream.chunks():
                    session.append(chunk)
        except httpx.HTTPError as e:
            GATEWAY_DOCKER_ERRORS.labels(operation="exec_stream", error_type="connection").inc()
            result = session.fail(_error_text(e))
            logger.warning(
                "Exec stream failed",
                extra={**extra, "event": LogEvent.EXEC_FAILED, "error": result.error},
            )
            return result
        finally:
            await stream.close()
            GATEWAY_EXEC_OUTPUT_BYTES.labels(kind=kind.value).inc(session.bytes_received)

        result = session.complete()
        logger.info(
            "Exec completed",
            extra={
                **extra,
                "event": LogEvent.EXEC_COMPLETED,
                "output_bytes": session.bytes_received,
            },
        )
        return result
