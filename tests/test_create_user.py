"""Tests for the create_user CLI: success, conflict and invalid input exit codes."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogapi.core.security import PasswordHasher
from blogapi.models import Base, User
from blogapi.scripts.create_user import main

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        fast_hasher = PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)
        for p in (
            patch("blogapi.scripts.create_user.SessionLocal", TestingSessionLocal),
            patch.object(PasswordHasher, "from_settings", return_value=fast_hasher),
        ):
            p.start()
            self.addCleanup(p.stop)

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=engine)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_user_with_hashed_password(self) -> None:
        code, out, _ = self._run("alice", "alice@example.com", "pw123456")
        self.assertEqual(code, 0)
        self.assertIn("Created user 'alice'", out)

        db = TestingSessionLocal()
        try:
            user = db.query(User).filter(User.username == "alice").one()
        finally:
            db.close()
        self.assertEqual(user.email, "alice@example.com")
        self.assertTrue(user.password_hash.startswith("$argon2id$"))

    def test_existing_username_exits_1(self) -> None:
        self._run("alice", "alice@example.com", "pw123456")
        code, _, err = self._run("alice", "other@example.com", "pw123456")
        self.assertEqual(code, 1)
        self.assertIn("Username already exists", err)

    def test_existing_email_exits_1(self) -> None:
        self._run("alice", "alice@example.com", "pw123456")
        code, _, err = self._run("bobby", "alice@example.com", "pw123456")
        self.assertEqual(code, 1)
        self.assertIn("Email already exists", err)

    def test_invalid_input_exits_1_without_touching_db(self) -> None:
        with patch("blogapi.scripts.create_user.SessionLocal") as session_factory:
            code, _, err = self._run("abc", "not-an-email", "pw123456")
        self.assertEqual(code, 1)
        self.assertIn("Invalid username", err)
        self.assertIn("Invalid email", err)
        session_factory.assert_not_called()


if __name__ == "__main__":
    unittest.main()
