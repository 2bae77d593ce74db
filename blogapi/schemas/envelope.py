"""Uniform response envelope shared by every endpoint, success or failure."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ErrorInfo(BaseModel):
    """Machine-readable error code plus optional structured details."""

    code: str = Field(description="Stable error code, e.g. USERNAME_EXISTS")
    details: Any = Field(default=None, description="Per-field reasons or extra context")


class Meta(BaseModel):
    """Response metadata for tracing."""

    timestamp: str = Field(description="UTC time the response was produced (RFC 3339)")
    trace_id: str = Field(description="Request correlation id (X-Trace-ID)")


class Envelope(BaseModel, Generic[DataT]):
    """Response body: success flag, HTTP status, message, payload, error and meta."""

    success: bool
    code: int = Field(description="HTTP status code of the response")
    message: str
    data: DataT | None = None
    error: ErrorInfo | None = None
    meta: Meta


class FieldError(BaseModel):
    """One failed request field and a human-readable reason."""

    field: str
    reason: str
