"""Builders for the uniform response envelope."""

import uuid
from datetime import UTC, datetime
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from blogapi.schemas.envelope import Envelope, ErrorInfo, Meta

TRACE_ID_HEADER = "X-Trace-ID"


def get_trace_id(request: Request) -> str:
    """Trace id set by the middleware, else the inbound header, else a fresh UUID."""
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        return trace_id
    trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
    request.state.trace_id = trace_id
    return trace_id


def _meta(request: Request) -> Meta:
    return Meta(
        timestamp=datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
        trace_id=get_trace_id(request),
    )


def success(request: Request, status_code: int, message: str, data: Any = None) -> Envelope:
    return Envelope(
        success=True,
        code=status_code,
        message=message,
        data=data,
        meta=_meta(request),
    )


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = Envelope(
        success=False,
        code=status_code,
        message=message,
        error=ErrorInfo(code=error_code, details=details),
        meta=_meta(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )
