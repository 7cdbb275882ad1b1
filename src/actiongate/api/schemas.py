"""API schemas.

Request/response models for all API endpoints.
"""

from pydantic import BaseModel

# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


# =============================================================================
# Instances
# =============================================================================


class MessageResponse(BaseModel):
    """Power action response."""

    message: str


class ScriptRequest(BaseModel):
    """Script execution request.

    Fields are optional here so that missing values produce the
    gateway's own 400 response instead of a validation error.
    """

    script: str | None = None
    name: str | None = None


class CommandRequest(BaseModel):
    """Command execution request."""

    command: str | None = None
    name: str | None = None


class ExecResponse(BaseModel):
    """Script/command execution response."""

    message: str
    output: str
