"""ORM models for posts, categories, and their association table."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    func,
    text,
)

from blogapi.models.base import Base

posts_categories = Table(
    "posts_categories",
    Base.metadata,
    Column(
        "post_id",
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Category(Base):
    """Tag attached to posts through posts_categories."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)


class Post(Base):
    """
    Blog post owned by a single user.

    Deleting sets deleted_at; deleted rows are excluded from every lookup. The slug is
    unique among non-deleted posts only, so a deleted post's slug can be reused.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index(
            "uq_posts_slug_active",
            "slug",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(String(36), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title = Column(String(200), nullable=False)
    slug = Column(String(255), nullable=False)
    image = Column(String(2048), nullable=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)
