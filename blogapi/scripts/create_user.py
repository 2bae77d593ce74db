"""
Register a user without going through the HTTP API. Run from project root:
  python -m blogapi.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m blogapi.scripts.create_user alice alice@example.com your-secure-password
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from blogapi.core.config import get_settings
from blogapi.core.database import SessionLocal
from blogapi.core.errors import AppError, ConflictError
from blogapi.core.logging_config import configure_logging
from blogapi.core.security import PasswordHasher, TokenManager
from blogapi.repositories import UserRepository
from blogapi.schemas.auth import RegisterRequest
from blogapi.services.auth import AuthService

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a blog user.")
    parser.add_argument("username", help="Username (4-32 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (4-128 chars)")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        request = RegisterRequest(
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(p) for p in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        service = AuthService(
            UserRepository(db),
            PasswordHasher.from_settings(settings),
            TokenManager.from_settings(settings),
        )
        result = service.register(request.username, request.email, request.password)
        print(f"Created user '{result.username}' with id {result.id}.")
        return 0
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except AppError as e:
        logger.error("User creation failed: %s", e.message, exc_info=e.cause or e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
