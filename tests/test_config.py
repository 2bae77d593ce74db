"""Tests for blogapi.core.config Settings validation."""

import os
import subprocess
import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

from blogapi.core.config import DEFAULT_JWT_SECRET, Settings

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.APP_ENV, "dev")
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(s.ARGON2_MEMORY_COST, 65536)
        self.assertEqual(s.AUTH_COOKIE_NAME, "auth_token")

    def test_non_postgres_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/blog")

    def test_database_url_trimmed(self) -> None:
        s = _settings(DATABASE_URL="postgresql://u:p@db:5432/blog ")
        self.assertEqual(s.DATABASE_URL, "postgresql://u:p@db:5432/blog")

    def test_log_level_normalised(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_unknown_log_level_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="VERBOSE")

    def test_jwt_algorithm_must_be_hmac(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM="hs512").JWT_ALGORITHM, "HS512")
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_blank_jwt_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_default_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", JWT_SECRET=DEFAULT_JWT_SECRET)

    def test_custom_secret_accepted_in_prod(self) -> None:
        s = _settings(APP_ENV="prod", JWT_SECRET="a-real-production-secret-value")
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "a-real-production-secret-value")

    def test_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=10081)

    def test_argon2_memory_floor(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(ARGON2_MEMORY_COST=512)

    def test_statement_timeout_zero_allowed(self) -> None:
        self.assertEqual(_settings(DB_STATEMENT_TIMEOUT_MS=0).DB_STATEMENT_TIMEOUT_MS, 0)


class TestImportSideEffects(unittest.TestCase):
    def test_security_primitives_import_without_reading_settings(self) -> None:
        code = (
            "import sys\n"
            "from blogapi.core.security import PasswordHasher, TokenManager\n"
            "from blogapi.core.config import get_settings\n"
            "assert get_settings.cache_info().currsize == 0\n"
            "assert 'blogapi.core.database' not in sys.modules\n"
        )
        # An invalid URL would fail validation if Settings were built on import.
        env = dict(os.environ, DATABASE_URL="mysql://root@localhost/blog")
        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=PROJECT_ROOT,
            env=env,
            capture_output=True,
            text=True,
        )
        self.assertEqual(result.returncode, 0, result.stderr)


if __name__ == "__main__":
    unittest.main()
