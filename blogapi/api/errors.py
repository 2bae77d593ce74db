"""Exception handlers rendering every failure as the error envelope."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi.api.responses import error_response
from blogapi.core.errors import (
    AppError,
    AuthenticationError,
    InfrastructureError,
    InputValidationError,
)
from blogapi.schemas.envelope import FieldError

logger = logging.getLogger(__name__)

REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})

# Messages for fields whose generic wording would be unhelpful.
FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "email": {
        "value_error": "Please provide a valid email address",
        "missing": "Email address is required",
    },
    "slug": {
        "string_pattern_mismatch": "Slug must contain only lowercase letters, numbers, and hyphens",
    },
    "image": {
        "value_error": "Image must be a valid URL",
    },
}

HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _field_path(loc: tuple[Any, ...]) -> str:
    parts = list(loc)
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "body"


def format_validation_error(error: dict[str, Any]) -> FieldError:
    """Turn one Pydantic error into a {field, reason} pair with a readable reason."""
    error_type = error.get("type", "")
    field = _field_path(tuple(error.get("loc", ())))
    if error_type == "json_invalid":
        return FieldError(field="body", reason="Invalid JSON format")

    base_name = field.split(".")[0]
    custom = FIELD_MESSAGES.get(base_name, {}).get(error_type)
    if custom:
        return FieldError(field=field, reason=custom)

    label = base_name.replace("_", " ").capitalize()
    ctx = error.get("ctx") or {}
    if error_type == "missing":
        reason = f"{label} is required"
    elif error_type == "string_too_short":
        reason = f"{label} must be at least {ctx.get('min_length')} characters"
    elif error_type == "string_too_long":
        reason = f"{label} must not exceed {ctx.get('max_length')} characters"
    elif error_type.startswith("uuid_"):
        reason = f"{label} must be a valid UUID"
    elif error_type in ("bool_type", "bool_parsing"):
        reason = f"{label} must be true or false"
    else:
        reason = f"{label} is invalid"
    return FieldError(field=field, reason=reason)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        logger.error(
            "Infrastructure failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.cause or exc,
        )
        return error_response(
            request,
            InfrastructureError.status_code,
            InfrastructureError.message,
            InfrastructureError.code,
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(
        request,
        exc.status_code,
        exc.message,
        exc.code,
        details=exc.details,
        headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [format_validation_error(e) for e in exc.errors()]
    return error_response(
        request,
        InputValidationError.status_code,
        InputValidationError.message,
        InputValidationError.code,
        details=details,
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(request, 500, "Internal server error", "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
