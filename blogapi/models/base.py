"""SQLAlchemy declarative Base shared by the blog tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the target for Alembic autogenerate."""
