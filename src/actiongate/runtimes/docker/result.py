"""Result types for the Docker runtime."""

from enum import Enum

from pydantic import BaseModel


class PowerAction(str, Enum):
    """Lifecycle verbs accepted by the power endpoint."""

    START = "start"
    STOP = "stop"
    RESTART = "restart"
    PAUSE = "pause"
    UNPAUSE = "unpause"
    KILL = "kill"


class PowerStatus(str, Enum):
    """Power action status values."""

    COMPLETED = "completed"
    NOT_MODIFIED = "not_modified"
    FAILED = "failed"


class PowerOutcome(BaseModel):
    """Result of one lifecycle call, carrying the runtime message when there is one."""

    action: PowerAction
    status: PowerStatus
    message: str = ""

    @property
    def is_modified(self) -> bool:
        return self.status == PowerStatus.COMPLETED

    @property
    def is_failure(self) -> bool:
        return self.status == PowerStatus.FAILED


class ExecKind(str, Enum):
    """Kind of inline shell text executed in a container."""

    SCRIPT = "script"
    COMMAND = "command"


class ExecState(str, Enum):
    """Exec session states.

    created -> started | failed
    started -> streaming
    streaming -> completed | failed
    """

    CREATED = "created"
    STARTED = "started"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExecState.COMPLETED, ExecState.FAILED)


class ExecResult(BaseModel):
    """Terminal result of an exec session.

    output is only populated for completed sessions; error only for failed ones.
    """

    kind: ExecKind
    name: str
    state: ExecState
    output: str = ""
    error: str | None = None

    @property
    def is_success(self) -> bool:
        return self.state == ExecState.COMPLETED
