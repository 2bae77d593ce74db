"""Pydantic request/response schemas."""

from blogapi.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResult,
    RegisterRequest,
    RegisterResult,
    SessionUser,
)
from blogapi.schemas.category import CategoryCreate, CategoryRead
from blogapi.schemas.envelope import Envelope, ErrorInfo, FieldError, Meta
from blogapi.schemas.health import HealthResponse
from blogapi.schemas.post import PostCreate, PostRead, PostUpdate

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CurrentUser",
    "Envelope",
    "ErrorInfo",
    "FieldError",
    "HealthResponse",
    "LoginRequest",
    "LoginResult",
    "Meta",
    "PostCreate",
    "PostRead",
    "PostUpdate",
    "RegisterRequest",
    "RegisterResult",
    "SessionUser",
]
