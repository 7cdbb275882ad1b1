"""Error handling module for actiongate.

This module defines error codes, exception classes, and response models.

Error Response Format:
{
    "message": "Error executing script build",
    "error": "no such container"
}

The "error" field is only present for exec failures.
"""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for Gateway API."""

    INVALID_POWER_ACTION = "INVALID_POWER_ACTION"
    MISSING_FIELDS = "MISSING_FIELDS"
    BENIGN_CONFLICT = "BENIGN_CONFLICT"
    RUNTIME_FAILURE = "RUNTIME_FAILURE"
    EXEC_FAILED = "EXEC_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Error response format."""

    message: str
    error: str | None = None


class GatewayError(Exception):
    """Base exception for actiongate.

    All gateway-specific exceptions should inherit from this class.
    This enables centralized exception handling in FastAPI.

    Attributes:
        code: The error code from ErrorCode enum.
        message: Human-readable error message.
        status_code: HTTP status code to return.
        error: Underlying failure text, if any.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int,
        error: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse model."""
        return ErrorResponse(message=self.message, error=self.error)


class InvalidPowerActionError(GatewayError):
    """400 Bad Request - Power action is not a known lifecycle verb."""

    def __init__(self, message: str = "Invalid power action") -> None:
        super().__init__(ErrorCode.INVALID_POWER_ACTION, message, 400)


class MissingFieldsError(GatewayError):
    """400 Bad Request - Required request fields are missing."""

    def __init__(self, message: str = "Required fields are missing") -> None:
        super().__init__(ErrorCode.MISSING_FIELDS, message, 400)


class BenignConflictError(GatewayError):
    """304 Not Modified - Container is already in the requested state."""

    def __init__(self, message: str = "Container already in requested state") -> None:
        super().__init__(ErrorCode.BENIGN_CONFLICT, message, 304)


class RuntimeFailureError(GatewayError):
    """500 Internal Server Error - Container runtime call failed."""

    def __init__(self, message: str = "Container runtime call failed") -> None:
        super().__init__(ErrorCode.RUNTIME_FAILURE, message, 500)


class ExecFailedError(GatewayError):
    """500 Internal Server Error - Script or command execution failed."""

    def __init__(self, message: str, error: str) -> None:
        super().__init__(ErrorCode.EXEC_FAILED, message, 500, error=error)


class InternalError(GatewayError):
    """500 Internal Server Error - Internal error."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(ErrorCode.INTERNAL_ERROR, message, 500)
