"""Persistence stores for users, posts and categories."""

from blogapi.repositories.base import CategoryStore, PostStore, UserStore
from blogapi.repositories.categories import CategoryRepository
from blogapi.repositories.posts import PostRepository
from blogapi.repositories.users import UserRepository

__all__ = [
    "CategoryRepository",
    "CategoryStore",
    "PostRepository",
    "PostStore",
    "UserRepository",
    "UserStore",
]
