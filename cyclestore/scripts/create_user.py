"""
Provision an account (there is no public registration). Run from project root:
  python -m cyclestore.scripts.create_user EMAIL PASSWORD NAME [role]
Example:
  python -m cyclestore.scripts.create_user admin@example.com s3cret-pass "Ana Admin" admin
"""
import argparse
import sys
from typing import List, Optional

from cyclestore.core.errors import ValidationError
from cyclestore.core.logging_config import configure_logging
from cyclestore.core.settings import Settings
from cyclestore.db.session import Database
from cyclestore.models.user import ROLES
from cyclestore.services.users import create_user


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = argparse.ArgumentParser(description="Create a cyclestore user account.")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("password", help="Password (6+ chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("role", nargs="?", default="user", choices=ROLES)
    args = parser.parse_args(argv)

    settings = settings or Settings()
    configure_logging(settings.log_level)
    database = Database(settings.database_url)
    database.create_all()
    db = database.session()
    try:
        user = create_user(db, args.email, args.password, args.name, args.role)
    except ValidationError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"Created user '{user.email}' (id {user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
