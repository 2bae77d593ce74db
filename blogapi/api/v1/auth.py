"""Registration, login/logout/refresh, and the get_current_user dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blogapi.api.deps import get_auth_service, get_token_manager
from blogapi.api.responses import success
from blogapi.core.config import Settings, get_settings
from blogapi.core.errors import AuthenticationError
from blogapi.core.security import TokenManager
from blogapi.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResult,
    SessionUser,
)
from blogapi.schemas.envelope import Envelope
from blogapi.services.auth import AuthService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _set_auth_cookie(
    response: Response, token: str, settings: Settings, tokens: TokenManager
) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(tokens.ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="strict",
    )


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str:
    """Token from the auth cookie, falling back to an Authorization: Bearer header."""
    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    if request.headers.get("Authorization"):
        raise AuthenticationError("Invalid authorization header format")
    raise AuthenticationError("Missing authentication token")


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
) -> CurrentUser:
    """
    Dependency: require a valid session token and return the caller from its claims.

    Raises ExpiredTokenError or InvalidTokenError (both 401, distinct codes). The user
    row is not re-read; the token alone identifies the caller.
    """
    token = extract_token(request, credentials, settings)
    claims = tokens.validate(token)
    return CurrentUser(id=claims.user_id, username=claims.username)


@router.post(
    "/register",
    response_model=Envelope[RegisterResult],
    status_code=status.HTTP_201_CREATED,
)
def register(
    request: Request,
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> Envelope:
    """Create an account. 409 USERNAME_EXISTS or EMAIL_EXISTS on collision (username checked first)."""
    result = service.register(body.username, body.email, body.password)
    return success(request, status.HTTP_201_CREATED, "User registered successfully", result)


@router.post("/login", response_model=Envelope[SessionUser])
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
) -> Envelope:
    """
    Authenticate with username and password.

    The token is set in an HTTP-only cookie and is not echoed in the body. Unknown
    username and wrong password both return 401 INVALID_CREDENTIALS.
    """
    result = service.login(body.username, body.password)
    _set_auth_cookie(response, result.access_token, settings, tokens)
    return success(
        request,
        status.HTTP_200_OK,
        "Login successful",
        SessionUser(username=result.username),
    )


@router.post("/logout", response_model=Envelope[None])
def logout(
    request: Request,
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope:
    """
    Clear the auth cookie.

    Tokens are stateless: a copy of the token held elsewhere stays valid until it expires.
    """
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="strict",
    )
    return success(request, status.HTTP_200_OK, "Logout successful")


@router.post("/refresh", response_model=Envelope[SessionUser])
def refresh(
    request: Request,
    response: Response,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
) -> Envelope:
    """Exchange a current or expired (but authentic) token for a fresh one."""
    token = extract_token(request, credentials, settings)
    new_token = tokens.refresh_token(token)
    claims = tokens.validate(new_token)
    _set_auth_cookie(response, new_token, settings, tokens)
    return success(
        request,
        status.HTTP_200_OK,
        "Token refreshed",
        SessionUser(username=claims.username),
    )


@router.get("/me", response_model=Envelope[CurrentUser])
def me(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Envelope:
    """Identity of the authenticated caller."""
    return success(request, status.HTTP_200_OK, "Current user", current_user)
