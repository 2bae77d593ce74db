"""Post service: CRUD with slug uniqueness, publish stamping and ownership enforcement."""

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from blogapi.core.errors import CategoryNotFoundError, PostNotFoundError, SlugExistsError
from blogapi.models import Post
from blogapi.repositories.base import CategoryStore, PostStore
from blogapi.schemas.category import CategoryRead
from blogapi.schemas.post import PostCreate, PostRead, PostUpdate
from blogapi.services.authorization import ensure_post_owner

logger = logging.getLogger(__name__)

# Scalar fields a PostUpdate may change; publish and category_ids are handled separately.
UPDATABLE_FIELDS = ("title", "slug", "image", "content", "excerpt")


def _now() -> datetime:
    return datetime.now(UTC)


class PostService:
    def __init__(self, posts: PostStore, categories: CategoryStore) -> None:
        self.posts = posts
        self.categories = categories

    def _read(self, post: Post) -> PostRead:
        categories = self.posts.get_post_categories(post.id)
        return PostRead.model_validate(post).model_copy(
            update={"categories": [CategoryRead.model_validate(c) for c in categories]}
        )

    def _ensure_slug_free(self, slug: str) -> None:
        if self.posts.find_post_by_slug(slug) is not None:
            raise SlugExistsError()

    def _ensure_categories_exist(self, category_ids: Sequence[str]) -> None:
        for category_id in category_ids:
            if self.categories.find_category_by_id(category_id) is None:
                raise CategoryNotFoundError(f"Category {category_id} not found")

    def _find_or_404(self, post_id: str) -> Post:
        post = self.posts.find_post_by_id(post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    def create_post(self, user_id: str, data: PostCreate) -> PostRead:
        """
        Create a post owned by user_id. published_at is stamped when the post is created
        already published.
        """
        self._ensure_slug_free(data.slug)
        category_ids = _dedupe(data.category_ids)
        self._ensure_categories_exist(category_ids)

        now = _now()
        post = Post(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=data.title,
            slug=data.slug,
            image=data.image,
            content=data.content,
            excerpt=data.excerpt,
            is_published=data.publish,
            published_at=now if data.publish else None,
            created_at=now,
            updated_at=now,
        )
        self.posts.create_post(post)
        self.posts.add_categories_to_post(post.id, category_ids)
        logger.info("Created post id=%s user_id=%s", post.id, user_id)
        return self._read(post)

    def get_post(self, post_id: str) -> PostRead:
        return self._read(self._find_or_404(post_id))

    def get_post_by_slug(self, slug: str) -> PostRead:
        post = self.posts.find_post_by_slug(slug)
        if post is None:
            raise PostNotFoundError()
        return self._read(post)

    def update_post(self, post_id: str, user_id: str, changes: PostUpdate) -> PostRead:
        """
        Apply a partial update as user_id.

        Fields that are absent or null keep their current value. Changing the slug to the
        post's own current slug is not a conflict. published_at is stamped on the first
        transition to published and never cleared afterwards.
        """
        post = self._find_or_404(post_id)
        ensure_post_owner(user_id, post.user_id)

        supplied = {
            name: value
            for name, value in changes.model_dump(exclude_unset=True).items()
            if value is not None
        }
        new_slug = supplied.get("slug")
        if new_slug is not None and new_slug != post.slug:
            self._ensure_slug_free(new_slug)

        category_ids = None
        if changes.category_ids is not None:
            category_ids = _dedupe(changes.category_ids)
            self._ensure_categories_exist(category_ids)

        for name in UPDATABLE_FIELDS:
            if name in supplied:
                setattr(post, name, supplied[name])
        if "publish" in supplied:
            post.is_published = supplied["publish"]

        now = _now()
        if post.is_published and post.published_at is None:
            post.published_at = now
        post.updated_at = now
        self.posts.update_post(post)

        if category_ids is not None:
            self.posts.remove_categories_from_post(post.id)
            self.posts.add_categories_to_post(post.id, category_ids)

        logger.info("Updated post id=%s user_id=%s", post.id, user_id)
        return self._read(post)

    def delete_post(self, post_id: str, user_id: str) -> None:
        """Soft-delete a post as user_id."""
        post = self._find_or_404(post_id)
        ensure_post_owner(user_id, post.user_id)
        self.posts.delete_post(post.id)
        logger.info("Deleted post id=%s user_id=%s", post.id, user_id)

    def list_posts(self) -> list[PostRead]:
        return [self._read(p) for p in self.posts.list_posts()]

    def list_posts_by_user(self, user_id: str) -> list[PostRead]:
        return [self._read(p) for p in self.posts.find_posts_by_user_id(user_id)]


def _dedupe(category_ids: Sequence[UUID | str]) -> list[str]:
    """Stringify and drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(str(cid) for cid in category_ids))
