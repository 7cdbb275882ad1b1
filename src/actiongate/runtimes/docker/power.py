"""Docker power (lifecycle) manager for the gateway."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

import httpx

from actiongate.infra import ContainerAPI, DockerAPIError
from actiongate.logging_schema import LogEvent
from actiongate.metrics import GATEWAY_DOCKER_DURATION, GATEWAY_DOCKER_ERRORS
from actiongate.runtimes.docker.conflict import ConflictClassifier
from actiongate.runtimes.docker.result import PowerAction, PowerOutcome, PowerStatus

logger = logging.getLogger(__name__)


class PowerManager:
    """Applies lifecycle verbs to containers.

    Each verb maps to exactly one ContainerAPI call. No state is checked
    beforehand and nothing is retried: the runtime's answer is reported
    as-is.
    """

    def __init__(
        self,
        containers: ContainerAPI,
        classifier: ConflictClassifier | None = None,
    ) -> None:
        self._containers = containers
        self._classifier = classifier or ConflictClassifier()
        self._operations: dict[PowerAction, Callable[[str], Awaitable[None]]] = {
            PowerAction.START: containers.start,
            PowerAction.STOP: containers.stop,
            PowerAction.RESTART: containers.restart,
            PowerAction.PAUSE: containers.pause,
            PowerAction.UNPAUSE: containers.unpause,
            PowerAction.KILL: containers.kill,
        }

    async def apply(self, container_id: str, action: PowerAction) -> PowerOutcome:
        """Apply a lifecycle verb to a container.

        Returns:
            COMPLETED when the runtime accepted the call, NOT_MODIFIED when it
            answered with a benign conflict status, FAILED with the runtime
            message for any other runtime or transport failure.
        """
        operation = self._operations[action]
        extra = {"container": container_id, "action": action.value}

        try:
            with GATEWAY_DOCKER_DURATION.labels(operation=action.value).time():
                await operation(container_id)
        except DockerAPIError as e:
            if self._classifier.is_benign(e.status_code, action.value):
                GATEWAY_DOCKER_ERRORS.labels(
                    operation=action.value, error_type="not_modified"
                ).inc()
                logger.info(
                    "Container already in requested state",
                    extra={
                        **extra,
                        "event": LogEvent.POWER_ACTION_NOT_MODIFIED,
                        "status_code": e.status_code,
                    },
                )
                return PowerOutcome(
                    action=action, status=PowerStatus.NOT_MODIFIED, message=e.message
                )
            GATEWAY_DOCKER_ERRORS.labels(operation=action.value, error_type="api_error").inc()
            logger.warning(
                "Power action rejected by runtime",
                extra={
                    **extra,
                    "event": LogEvent.POWER_ACTION_FAILED,
                    "status_code": e.status_code,
                    "error": e.message,
                },
            )
            return PowerOutcome(
                action=action, status=PowerStatus.FAILED, message=e.message
            )
        except httpx.HTTPError as e:
            GATEWAY_DOCKER_ERRORS.labels(operation=action.value, error_type="connection").inc()
            message = str(e) or type(e).__name__
            logger.warning(
                "Power action failed",
                extra={**extra, "event": LogEvent.POWER_ACTION_FAILED, "error": message},
            )
            return PowerOutcome(
                action=action, status=PowerStatus.FAILED, message=message
            )

        logger.info(
            "Power action completed",
            extra={**extra, "event": LogEvent.POWER_ACTION_COMPLETED},
        )
        return PowerOutcome(action=action, status=PowerStatus.COMPLETED)
