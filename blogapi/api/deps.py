"""FastAPI dependency providers wiring settings, stores and services per request."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from blogapi.core.config import get_settings
from blogapi.core.database import get_db
from blogapi.core.security import PasswordHasher, TokenManager
from blogapi.repositories import CategoryRepository, PostRepository, UserRepository
from blogapi.services.auth import AuthService
from blogapi.services.categories import CategoryService
from blogapi.services.posts import PostService


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher built from the Argon2 settings."""
    return PasswordHasher.from_settings(get_settings())


@lru_cache
def get_token_manager() -> TokenManager:
    """Process-wide token manager built from the JWT settings."""
    return TokenManager.from_settings(get_settings())


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
) -> AuthService:
    return AuthService(UserRepository(db), hasher, tokens)


def get_post_service(db: Annotated[Session, Depends(get_db)]) -> PostService:
    return PostService(PostRepository(db), CategoryRepository(db))


def get_category_service(db: Annotated[Session, Depends(get_db)]) -> CategoryService:
    return CategoryService(CategoryRepository(db))
