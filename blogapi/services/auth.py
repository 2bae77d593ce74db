"""Authentication service: registration and login."""

import logging
import uuid
from datetime import UTC, datetime

from blogapi.core.errors import EmailExistsError, InvalidCredentialsError, UsernameExistsError
from blogapi.core.security import PasswordHasher, TokenManager
from blogapi.models import User
from blogapi.repositories.base import UserStore
from blogapi.schemas.auth import LoginResult, RegisterResult

logger = logging.getLogger(__name__)


class AuthService:
    """
    Orchestrates registration (uniqueness checks, hashing, persistence) and login
    (lookup, password verification, token issuance).

    Store failures propagate unchanged as InfrastructureError. The uniqueness checks run
    before the insert only to produce a precise conflict error; the database constraints
    remain authoritative, and a duplicate key at insert time surfaces as a generic failure.
    Login has no rate limiting, lockout, or last-login tracking.
    """

    def __init__(
        self,
        users: UserStore,
        hasher: PasswordHasher,
        tokens: TokenManager,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, username: str, email: str, password: str) -> RegisterResult:
        """
        Create a user. Username is checked before email, so a request colliding on both
        reports UsernameExistsError.
        """
        if self.users.find_user_by_username(username) is not None:
            raise UsernameExistsError()
        if self.users.find_user_by_email(email) is not None:
            raise EmailExistsError()

        now = datetime.now(UTC)
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
            created_at=now,
            updated_at=now,
        )
        self.users.create_user(user)
        logger.info("Registered user id=%s", user.id)
        return RegisterResult(id=user.id, username=user.username)

    def login(self, username: str, password: str) -> LoginResult:
        """
        Verify credentials and issue a session token.

        An unknown username and a wrong password raise the same InvalidCredentialsError so
        the response does not reveal whether the account exists.
        """
        user = self.users.find_user_by_username(username)
        if user is None:
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        token = self.tokens.generate_token(user.id, user.username)
        return LoginResult(access_token=token, username=user.username)
