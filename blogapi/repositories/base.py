"""Store interfaces consumed by the services, and SQLAlchemy error translation."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blogapi.core.errors import InfrastructureError
from blogapi.models import Category, Post, User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def create_user(self, user: User) -> None: ...

    def find_user_by_id(self, user_id: str) -> User | None: ...

    def find_user_by_username(self, username: str) -> User | None: ...

    def find_user_by_email(self, email: str) -> User | None: ...


class PostStore(Protocol):
    def create_post(self, post: Post) -> None: ...

    def find_post_by_id(self, post_id: str) -> Post | None: ...

    def find_post_by_slug(self, slug: str) -> Post | None: ...

    def update_post(self, post: Post) -> None: ...

    def delete_post(self, post_id: str) -> None: ...

    def list_posts(self) -> list[Post]: ...

    def find_posts_by_user_id(self, user_id: str) -> list[Post]: ...

    def add_categories_to_post(self, post_id: str, category_ids: Sequence[str]) -> None: ...

    def remove_categories_from_post(self, post_id: str) -> None: ...

    def get_post_categories(self, post_id: str) -> list[Category]: ...


class CategoryStore(Protocol):
    def create_category(self, category: Category) -> None: ...

    def find_category_by_id(self, category_id: str) -> Category | None: ...

    def find_category_by_slug(self, slug: str) -> Category | None: ...

    def list_categories(self) -> list[Category]: ...


@contextmanager
def store_errors(session: Session, operation: str) -> Iterator[None]:
    """
    Roll back and re-raise any SQLAlchemy failure as InfrastructureError.

    Duplicate-key violations at insert time are included: the service pre-checks give
    friendly conflict errors, but a lost race still surfaces as a generic failure.
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Store operation %s failed: %s", operation, type(e).__name__)
        raise InfrastructureError(f"{operation} failed", cause=e) from e
