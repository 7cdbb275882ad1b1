"""Instance API endpoints.

Routes are matched in declaration order, so /script and /command must be
registered before the catch-all power route.
"""

import logging

from fastapi import APIRouter, Depends

from actiongate.api.dependencies import get_runtime
from actiongate.api.errors import (
    BenignConflictError,
    ExecFailedError,
    InvalidPowerActionError,
    MissingFieldsError,
    RuntimeFailureError,
)
from actiongate.api.schemas import (
    CommandRequest,
    ExecResponse,
    MessageResponse,
    ScriptRequest,
)
from actiongate.logging_schema import LogEvent
from actiongate.runtimes import DockerRuntime
from actiongate.runtimes.docker.result import ExecKind, PowerAction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/instances", tags=["instances"])


async def _execute(
    runtime: DockerRuntime,
    container_id: str,
    kind: ExecKind,
    name: str,
    text: str,
) -> ExecResponse:
    label = kind.value.capitalize()
    result = await runtime.execs.run(container_id, kind, name, text)
    if not result.is_success:
        raise ExecFailedError(
            f"Error executing {kind.value} {name}",
            error=result.error or "",
        )
    return ExecResponse(
        message=f"{label} {name} executed successfully",
        output=result.output,
    )


@router.post("/{container_id}/script", response_model=ExecResponse)
async def execute_script(
    container_id: str,
    request: ScriptRequest | None = None,
    runtime: DockerRuntime = Depends(get_runtime),
) -> ExecResponse:
    """Run an inline shell script inside a container."""
    if request is None or not request.script or not request.name:
        raise MissingFieldsError("Script and name are required")
    return await _execute(runtime, container_id, ExecKind.SCRIPT, request.name, request.script)


@router.post("/{container_id}/command", response_model=ExecResponse)
async def execute_command(
    container_id: str,
    request: CommandRequest | None = None,
    runtime: DockerRuntime = Depends(get_runtime),
) -> ExecResponse:
    """Run an inline shell command inside a container."""
    if request is None or not request.command or not request.name:
        raise MissingFieldsError("Command and name are required")
    return await _execute(runtime, container_id, ExecKind.COMMAND, request.name, request.command)


@router.post("/{container_id}/{power}", response_model=MessageResponse)
async def power_action(
    container_id: str,
    power: str,
    runtime: DockerRuntime = Depends(get_runtime),
) -> MessageResponse:
    """Apply a lifecycle verb (start, stop, restart, pause, unpause, kill)."""
    try:
        action = PowerAction(power)
    except ValueError:
        logger.info(
            "Rejected power action",
            extra={
                "event": LogEvent.POWER_ACTION_REJECTED,
                "container": container_id,
                "action": power,
            },
        )
        raise InvalidPowerActionError() from None

    outcome = await runtime.power.apply(container_id, action)
    if outcome.is_failure:
        raise RuntimeFailureError(outcome.message)
    if not outcome.is_modified:
        raise BenignConflictError(outcome.message)
    return MessageResponse(message=f"Container {action.value}ed successfully")
