"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field

USERNAME_MIN_LEN = 4
USERNAME_MAX_LEN = 32
PASSWORD_MIN_LEN = 4
PASSWORD_MAX_LEN = 128


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Username",
    )
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )


class RegisterResult(BaseModel):
    """Identity of a newly registered user (no password, no hash)."""

    id: str
    username: str


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(
        ..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class LoginResult(BaseModel):
    """Signed session token issued at login."""

    access_token: str
    username: str


class SessionUser(BaseModel):
    """Username returned after login or refresh; the token itself travels in the cookie."""

    username: str


class CurrentUser(BaseModel):
    """Authenticated caller, taken from validated token claims."""

    id: str
    username: str
