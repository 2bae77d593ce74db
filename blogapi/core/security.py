"""Password hashing (Argon2id) and session token issuance/validation (HMAC-signed JWT)."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from argon2 import PasswordHasher as Argon2Verifier
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pydantic import BaseModel

from blogapi.core.config import HMAC_ALGORITHMS, Settings
from blogapi.core.errors import ExpiredTokenError, HashingError, InvalidTokenError

# Defaults mirror the Settings defaults (64 MiB memory, 3 passes, 4 lanes).
ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 65536
ARGON2_PARALLELISM = 4
ARGON2_HASH_LEN = 32
ARGON2_SALT_LEN = 16

DEFAULT_TOKEN_TTL = timedelta(hours=24)

REQUIRED_REGISTERED_CLAIMS = ["exp", "iat", "nbf"]


class PasswordHasher:
    """
    One-way salted password hashing with Argon2id.

    hash() returns a self-describing PHC string ($argon2id$v=19$m=...,t=...,p=...$salt$digest)
    with a fresh random salt per call. verify() recomputes the digest with the parameters
    embedded in the stored hash and compares in constant time.
    """

    def __init__(
        self,
        time_cost: int = ARGON2_TIME_COST,
        memory_cost: int = ARGON2_MEMORY_COST,
        parallelism: int = ARGON2_PARALLELISM,
        hash_len: int = ARGON2_HASH_LEN,
        salt_len: int = ARGON2_SALT_LEN,
    ) -> None:
        self._hasher = PasswordHash(
            (
                Argon2Hasher(
                    time_cost=time_cost,
                    memory_cost=memory_cost,
                    parallelism=parallelism,
                    hash_len=hash_len,
                    salt_len=salt_len,
                ),
            )
        )
        # Verification uses argon2-cffi directly: pwdlib reports an undecodable hash as a mismatch.
        self._verifier = Argon2Verifier()

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            time_cost=settings.ARGON2_TIME_COST,
            memory_cost=settings.ARGON2_MEMORY_COST,
            parallelism=settings.ARGON2_PARALLELISM,
            hash_len=settings.ARGON2_HASH_LEN,
            salt_len=settings.ARGON2_SALT_LEN,
        )

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Raises HashingError if Argon2 fails."""
        try:
            return self._hasher.hash(plain_password)
        except (Argon2HashingError, ValueError, TypeError) as e:
            raise HashingError("Password hashing failed", cause=e) from e

    def verify(self, plain_password: str, encoded_hash: str) -> bool:
        """
        Verify a plain password against a stored hash.

        Returns False only for a wrong password. Raises HashingError when the stored hash
        cannot be decoded (unknown scheme, truncated, bad base64), which callers must not
        treat as a mismatch.
        """
        try:
            return self._verifier.verify(encoded_hash, plain_password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError, ValueError, TypeError) as e:
            raise HashingError("Stored password hash is unusable", cause=e) from e


class TokenClaims(BaseModel):
    """Identity and timing claims carried inside a session token."""

    user_id: str
    username: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenManager:
    """
    Issue and validate stateless session tokens.

    Tokens are JWTs signed with a symmetric HMAC key. There is no server-side session
    store and no revocation: a token stays valid until its expiry, even after logout.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenManager":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def generate_token(self, user_id: str, username: str) -> str:
        """Create a signed token for user_id/username valid from now until now + TTL."""
        now = self._clock()
        payload: dict[str, Any] = {
            "user_id": user_id,
            "username": username,
            "iat": now,
            "nbf": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> TokenClaims:
        """
        Verify signature, algorithm and expiry; return the embedded claims.

        Raises ExpiredTokenError only for an authentic, well-formed token past its expiry.
        Any other failure (bad signature, unexpected algorithm, unparsable payload,
        missing claims) raises InvalidTokenError.
        """
        return self._decode(token, verify_exp=True)

    def refresh_token(self, token: str) -> str:
        """
        Issue a new token for the identity in token.

        An expired token is accepted here on purpose, so clients can renew a session that
        lapsed; a forged or malformed token is still rejected with InvalidTokenError.
        """
        try:
            claims = self.validate(token)
        except ExpiredTokenError:
            claims = self._decode(token, verify_exp=False)
        return self.generate_token(claims.user_id, claims.username)

    def _decode(self, token: str, verify_exp: bool) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_REGISTERED_CLAIMS,
                    "verify_exp": verify_exp,
                },
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError(cause=e) from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(cause=e) from e

        user_id = payload.get("user_id")
        username = payload.get("username")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Invalid token payload")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("Invalid token payload")
        try:
            return TokenClaims(
                user_id=user_id,
                username=username,
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                not_before=datetime.fromtimestamp(payload["nbf"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidTokenError("Invalid token payload", cause=e) from e
