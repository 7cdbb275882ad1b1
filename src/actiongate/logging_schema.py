"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for the gateway.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.POWER_ACTION_COMPLETED, ...})
    """

    # Application lifecycle
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # Power actions
    POWER_ACTION_COMPLETED = "power_action_completed"
    POWER_ACTION_NOT_MODIFIED = "power_action_not_modified"
    POWER_ACTION_FAILED = "power_action_failed"
    POWER_ACTION_REJECTED = "power_action_rejected"

    # Exec sessions
    EXEC_STARTED = "exec_started"
    EXEC_COMPLETED = "exec_completed"
    EXEC_FAILED = "exec_failed"

    # Error events
    UNHANDLED_EXCEPTION = "unhandled_exception"
    GATEWAY_ERROR = "gateway_error"
