"""ORM model for registered users."""

from sqlalchemy import Column, DateTime, String, func

from blogapi.models.base import Base


class User(Base):
    """
    Registered author account.

    username and email are each globally unique. password_hash always holds an
    Argon2id PHC string, never the submitted password.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(32), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
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
