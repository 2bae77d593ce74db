"""SQLAlchemy-backed post store. Soft-deleted posts are invisible to every lookup."""

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, insert
from sqlalchemy.orm import Session

from blogapi.models import Category, Post, posts_categories
from blogapi.repositories.base import store_errors


class PostRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _active(self):
        return self.session.query(Post).filter(Post.deleted_at.is_(None))

    def create_post(self, post: Post) -> None:
        with store_errors(self.session, "create_post"):
            self.session.add(post)
            self.session.commit()

    def find_post_by_id(self, post_id: str) -> Post | None:
        with store_errors(self.session, "find_post_by_id"):
            return self._active().filter(Post.id == post_id).first()

    def find_post_by_slug(self, slug: str) -> Post | None:
        with store_errors(self.session, "find_post_by_slug"):
            return self._active().filter(Post.slug == slug).first()

    def update_post(self, post: Post) -> None:
        with store_errors(self.session, "update_post"):
            self.session.add(post)
            self.session.commit()

    def delete_post(self, post_id: str) -> None:
        now = datetime.now(UTC)
        with store_errors(self.session, "delete_post"):
            self._active().filter(Post.id == post_id).update(
                {Post.deleted_at: now, Post.updated_at: now},
                synchronize_session=False,
            )
            self.session.commit()

    def list_posts(self) -> list[Post]:
        """Published, non-deleted posts, most recently published first."""
        with store_errors(self.session, "list_posts"):
            return (
                self._active()
                .filter(Post.is_published.is_(True))
                .order_by(Post.published_at.desc())
                .all()
            )

    def find_posts_by_user_id(self, user_id: str) -> list[Post]:
        """All of a user's non-deleted posts (drafts included), newest first."""
        with store_errors(self.session, "find_posts_by_user_id"):
            return (
                self._active()
                .filter(Post.user_id == user_id)
                .order_by(Post.created_at.desc())
                .all()
            )

    def add_categories_to_post(self, post_id: str, category_ids: Sequence[str]) -> None:
        if not category_ids:
            return
        rows = [{"post_id": post_id, "category_id": cid} for cid in category_ids]
        with store_errors(self.session, "add_categories_to_post"):
            self.session.execute(insert(posts_categories), rows)
            self.session.commit()

    def remove_categories_from_post(self, post_id: str) -> None:
        with store_errors(self.session, "remove_categories_from_post"):
            self.session.execute(
                delete(posts_categories).where(posts_categories.c.post_id == post_id)
            )
            self.session.commit()

    def get_post_categories(self, post_id: str) -> list[Category]:
        with store_errors(self.session, "get_post_categories"):
            return (
                self.session.query(Category)
                .join(posts_categories, posts_categories.c.category_id == Category.id)
                .filter(posts_categories.c.post_id == post_id)
                .order_by(Category.name)
                .all()
            )
