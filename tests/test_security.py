"""Unit tests for blogapi.core.security: Argon2id password hashing and session tokens."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from blogapi.core.errors import ExpiredTokenError, HashingError, InvalidTokenError
from blogapi.core.security import PasswordHasher, TokenManager

SECRET = "unit-test-signing-secret-0123456789abcdef"


def fast_hasher() -> PasswordHasher:
    """Cheap Argon2 parameters so tests stay fast."""
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _clock(moment: datetime):
    return lambda: moment


class TestPasswordHasher(unittest.TestCase):
    """hash() produces a salted PHC string; verify() separates mismatch from unusable hashes."""

    def setUp(self) -> None:
        self.hasher = fast_hasher()

    def test_hash_is_self_describing_argon2id(self) -> None:
        encoded = self.hasher.hash("pw123456")
        self.assertTrue(encoded.startswith("$argon2id$"))
        self.assertIn("m=1024,t=1,p=1", encoded)
        self.assertNotIn("pw123456", encoded)

    def test_fresh_salt_per_call(self) -> None:
        self.assertNotEqual(self.hasher.hash("pw123456"), self.hasher.hash("pw123456"))

    def test_verify_correct_password(self) -> None:
        encoded = self.hasher.hash("pw123456")
        self.assertTrue(self.hasher.verify("pw123456", encoded))

    def test_verify_wrong_password_is_false_not_error(self) -> None:
        encoded = self.hasher.hash("pw123456")
        self.assertFalse(self.hasher.verify("pw1234567", encoded))

    def test_verify_uses_parameters_embedded_in_hash(self) -> None:
        encoded = fast_hasher().hash("pw123456")
        stronger = PasswordHasher(time_cost=2, memory_cost=2048, parallelism=1)
        self.assertTrue(stronger.verify("pw123456", encoded))

    def test_unrecognised_hash_raises_hashing_error(self) -> None:
        with self.assertRaises(HashingError):
            self.hasher.verify("pw123456", "not-a-hash")

    def test_plaintext_stored_as_hash_raises_hashing_error(self) -> None:
        with self.assertRaises(HashingError):
            self.hasher.verify("pw123456", "pw123456")

    def test_truncated_argon2_hash_raises_hashing_error(self) -> None:
        with self.assertRaises(HashingError):
            self.hasher.verify("pw123456", "$argon2id$v=19$m=1024,t=1,p=1")

    def test_bad_base64_argon2_hash_raises_hashing_error(self) -> None:
        with self.assertRaises(HashingError):
            self.hasher.verify("pw123456", "$argon2id$v=19$m=1024,t=1,p=1$!!!!$!!!!")

    def test_hash_missing_digest_raises_hashing_error(self) -> None:
        encoded = self.hasher.hash("pw123456")
        without_digest = encoded.rsplit("$", 1)[0]
        with self.assertRaises(HashingError):
            self.hasher.verify("pw123456", without_digest)


class TestGenerateAndValidate(unittest.TestCase):
    """Tokens validate immediately and carry identity and timing claims."""

    def setUp(self) -> None:
        self.manager = TokenManager(SECRET, ttl=timedelta(hours=24))

    def test_fresh_token_validates(self) -> None:
        token = self.manager.generate_token("user-id-1", "user-1")
        claims = self.manager.validate(token)
        self.assertEqual(claims.user_id, "user-id-1")
        self.assertEqual(claims.username, "user-1")

    def test_expiry_is_issued_at_plus_ttl(self) -> None:
        claims = self.manager.validate(self.manager.generate_token("id", "user-1"))
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=24))
        self.assertEqual(claims.not_before, claims.issued_at)

    def test_signed_with_hs256(self) -> None:
        token = self.manager.generate_token("id", "user-1")
        self.assertEqual(jwt.get_unverified_header(token)["alg"], "HS256")

    def test_default_ttl_is_24_hours(self) -> None:
        manager = TokenManager(SECRET)
        self.assertEqual(manager.ttl, timedelta(hours=24))


class TestValidateFailures(unittest.TestCase):
    """Expired tokens raise ExpiredTokenError; everything else raises InvalidTokenError."""

    def setUp(self) -> None:
        self.manager = TokenManager(SECRET, ttl=timedelta(hours=1))

    def test_expired_token(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=3)
        issuer = TokenManager(SECRET, ttl=timedelta(hours=1), clock=_clock(past))
        token = issuer.generate_token("id", "user-1")
        with self.assertRaises(ExpiredTokenError):
            self.manager.validate(token)

    def test_altered_signature(self) -> None:
        header, payload, signature = self.manager.generate_token("id", "user-1").split(".")
        replacement = "A" if signature[0] != "A" else "B"
        forged = ".".join([header, payload, replacement + signature[1:]])
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(forged)

    def test_altered_payload(self) -> None:
        header, payload, signature = self.manager.generate_token("id", "user-1").split(".")
        claims = json.loads(_b64url_decode(payload))
        claims["user_id"] = "someone-else"
        forged_payload = _b64url(json.dumps(claims).encode("utf-8"))
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(".".join([header, forged_payload, signature]))

    def test_expired_and_tampered_is_invalid_not_expired(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=3)
        issuer = TokenManager(SECRET, ttl=timedelta(hours=1), clock=_clock(past))
        header, payload, signature = issuer.generate_token("id", "user-1").split(".")
        replacement = "A" if signature[0] != "A" else "B"
        forged = ".".join([header, payload, replacement + signature[1:]])
        with self.assertRaises(InvalidTokenError) as ctx:
            self.manager.validate(forged)
        self.assertNotIsInstance(ctx.exception, ExpiredTokenError)

    def test_wrong_secret(self) -> None:
        other = TokenManager("another-signing-secret-0123456789abcdef")
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(other.generate_token("id", "user-1"))

    def test_unexpected_hmac_algorithm(self) -> None:
        other = TokenManager(SECRET, algorithm="HS512")
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(other.generate_token("id", "user-1"))

    def test_unsigned_token(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "user_id": "id",
                "username": "user-1",
                "iat": now,
                "nbf": now,
                "exp": now + timedelta(hours=1),
            },
            None,
            algorithm="none",
        )
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(token)

    def test_garbage(self) -> None:
        with self.assertRaises(InvalidTokenError):
            self.manager.validate("not.a.token")

    def test_missing_identity_claims(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "nbf": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(token)

    def test_missing_expiry(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"user_id": "id", "username": "user-1", "iat": now, "nbf": now},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.manager.validate(token)


class TestRefreshToken(unittest.TestCase):
    """refresh_token accepts expired-but-authentic tokens and rejects forged ones."""

    def setUp(self) -> None:
        self.manager = TokenManager(SECRET, ttl=timedelta(hours=1))
        past = datetime.now(UTC) - timedelta(hours=3)
        self.expired = TokenManager(
            SECRET, ttl=timedelta(hours=1), clock=_clock(past)
        ).generate_token("user-id-1", "user-1")

    def test_refresh_expired_token(self) -> None:
        new_token = self.manager.refresh_token(self.expired)
        claims = self.manager.validate(new_token)
        self.assertEqual(claims.user_id, "user-id-1")
        self.assertEqual(claims.username, "user-1")
        self.assertGreater(claims.expires_at, datetime.now(UTC))

    def test_refresh_valid_token(self) -> None:
        token = self.manager.generate_token("user-id-1", "user-1")
        claims = self.manager.validate(self.manager.refresh_token(token))
        self.assertEqual(claims.user_id, "user-id-1")

    def test_refresh_tampered_token_fails(self) -> None:
        header, payload, signature = self.expired.split(".")
        replacement = "A" if signature[0] != "A" else "B"
        with self.assertRaises(InvalidTokenError):
            self.manager.refresh_token(".".join([header, payload, replacement + signature[1:]]))

    def test_refresh_token_signed_with_other_secret_fails(self) -> None:
        other = TokenManager("another-signing-secret-0123456789abcdef")
        with self.assertRaises(InvalidTokenError):
            self.manager.refresh_token(other.generate_token("id", "user-1"))


class TestTokenManagerConstruction(unittest.TestCase):
    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenManager("")

    def test_asymmetric_algorithm_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenManager(SECRET, algorithm="RS256")

    def test_non_positive_ttl_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenManager(SECRET, ttl=timedelta(0))


if __name__ == "__main__":
    unittest.main()
