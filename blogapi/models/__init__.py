"""SQLAlchemy ORM models."""

from blogapi.models.base import Base
from blogapi.models.post import Category, Post, posts_categories
from blogapi.models.user import User

__all__ = ["Base", "Category", "Post", "User", "posts_categories"]
