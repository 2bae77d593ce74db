"""
Closed set of application errors.

Every error carries a stable machine-readable code, the HTTP status the API
boundary renders it with, and a message that is safe to show to callers.
InfrastructureError wraps the underlying cause; the cause is logged, never
returned to the caller.
"""

from typing import Any


class AppError(Exception):
    """Base for all errors the API boundary knows how to render."""

    code = "INTERNAL_ERROR"
    status_code = 500
    message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: Any = None,
        cause: Exception | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        self.details = details
        self.cause = cause
        super().__init__(self.message)


# Input


class InputValidationError(AppError):
    code = "VALIDATION_ERROR"
    status_code = 400
    message = "Validation failed"


# Conflicts


class ConflictError(AppError):
    code = "CONFLICT"
    status_code = 409
    message = "Resource already exists"


class UsernameExistsError(ConflictError):
    code = "USERNAME_EXISTS"
    message = "Username already exists"


class EmailExistsError(ConflictError):
    code = "EMAIL_EXISTS"
    message = "Email already exists"


class SlugExistsError(ConflictError):
    code = "SLUG_EXISTS"
    message = "Slug already exists"


class CategorySlugExistsError(ConflictError):
    code = "CATEGORY_SLUG_EXISTS"
    message = "Category slug already exists"


# Authentication (401) and authorization (403)


class AuthenticationError(AppError):
    code = "UNAUTHENTICATED"
    status_code = 401
    message = "Authentication required"


class InvalidCredentialsError(AuthenticationError):
    """Unknown username or wrong password; deliberately indistinguishable."""

    code = "INVALID_CREDENTIALS"
    message = "Invalid username or password"


class InvalidTokenError(AuthenticationError):
    """Forged, malformed, or wrongly signed token."""

    code = "INVALID_TOKEN"
    message = "Invalid token"


class ExpiredTokenError(AuthenticationError):
    """Authentic token whose expiry time has passed."""

    code = "TOKEN_EXPIRED"
    message = "Token has expired"


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 403
    message = "You are not authorized to perform this action"


# Missing resources


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404
    message = "Resource not found"


class PostNotFoundError(NotFoundError):
    code = "POST_NOT_FOUND"
    message = "Post not found"


class CategoryNotFoundError(NotFoundError):
    code = "CATEGORY_NOT_FOUND"
    message = "Category not found"


# Infrastructure


class InfrastructureError(AppError):
    """Store, network, or other unclassified failure. Rendered as a generic 500."""

    code = "INTERNAL_ERROR"
    status_code = 500
    message = "Internal server error"


class HashingError(InfrastructureError):
    """Password hash could not be computed or the stored hash is unusable."""
