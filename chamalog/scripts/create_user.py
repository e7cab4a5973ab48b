"""
Create a user (e.g. first admin). Run from project root:
  python -m chamalog.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m chamalog.scripts.create_user Administrator admin@chamalog.com your-secure-password admin
"""
import argparse
import sys

from chamalog.core.config import get_settings
from chamalog.core.database import Database
from chamalog.core.permissions import Role
from chamalog.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from chamalog.models import User
from chamalog.services.auth import normalize_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a ChamaLog user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email (must be unused)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.ADMIN.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (local SQLite setups without Alembic)",
    )
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = normalize_email(args.email)
    if not name or "@" not in email:
        print("A name and a valid email are required.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    database = Database(args.database_url or get_settings().DATABASE_URL)
    if args.create_tables:
        database.create_all()
    db = database.session()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
