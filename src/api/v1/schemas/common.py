"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel

_ERROR_DESCRIPTIONS = {
    400: "Validation failed or group state forbids the operation",
    401: "Missing or invalid bearer token",
    403: "Only the group creator may do this",
    404: "Group not found",
}


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries for the given error status codes."""
    return {
        code: {"model": ErrorResponse, "description": _ERROR_DESCRIPTIONS[code]}
        for code in status_codes
    }
