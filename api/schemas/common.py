"""Common Pydantic schemas shared across the API."""

from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of the error envelope."""

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    path: str = Field(description="Request path")
    method: str = Field(description="Request method")
    details: Optional[Any] = Field(None, description="Field-level validation errors")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: ErrorDetail


class SendTestEmailRequest(BaseModel):
    """Request body for sending a test e-mail."""

    email: Optional[str] = Field(None, description="Address to send the test message to")


class EmailVerifyResponse(BaseModel):
    """Mail transport reachability."""

    verified: bool
    message: str


class SendTestEmailResponse(BaseModel):
    """Result of a test send."""

    message: str
    message_id: Optional[str] = None


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
