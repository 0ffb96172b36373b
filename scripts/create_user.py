#!/usr/bin/env python3
"""Create a user account.

There is no registration endpoint; accounts are provisioned with this script.

Usage:
    python scripts/create_user.py someone@example.com 'their-password'

    # Against another database:
    DATABASE_URL=sqlite:///./other.db python scripts/create_user.py someone@example.com pw
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal, init_db
from app.exceptions import AuthError
from app.services.auth import AuthService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = AuthService().register(db, args.email, args.password)
    except AuthError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user {user.id} <{user.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
