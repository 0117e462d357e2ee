"""
Create an activated user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin

Self-service signups start inactive; an admin activates them with
PATCH /api/v1/users/{id} {"isActive": true}.
"""
import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import Database
from app.core.errors import AppError
from app.models import USER_ROLES
from app.schemas.auth import SignupRequest
from app.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an active user account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args(argv)

    try:
        body = SignupRequest(
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            username=args.username,
            password=args.password,
            password_confirm=args.password,
        )
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    load_dotenv()
    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    if database.url.startswith("sqlite"):
        database.create_all()
    db = database.session()
    try:
        user = create_user(db, body, role=args.role, is_active=True)
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
