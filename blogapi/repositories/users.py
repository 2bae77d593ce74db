"""SQLAlchemy-backed user store."""

from sqlalchemy.orm import Session

from blogapi.models import User
from blogapi.repositories.base import store_errors


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create_user(self, user: User) -> None:
        with store_errors(self.session, "create_user"):
            self.session.add(user)
            self.session.commit()

    def find_user_by_id(self, user_id: str) -> User | None:
        with store_errors(self.session, "find_user_by_id"):
            return self.session.query(User).filter(User.id == user_id).first()

    def find_user_by_username(self, username: str) -> User | None:
        with store_errors(self.session, "find_user_by_username"):
            return self.session.query(User).filter(User.username == username).first()

    def find_user_by_email(self, email: str) -> User | None:
        with store_errors(self.session, "find_user_by_email"):
            return self.session.query(User).filter(User.email == email).first()
