"""
Script to provision an admin account.

Self-registration only ever creates job seekers, and admins can only be
created by other admins, so the first admin has to come from here.

Run this script from the project root:
    python create_admin.py --name "Site Admin" --email admin@example.com
"""

import argparse
import getpass
import sys

from sqlalchemy.orm import Session

from jobboard.core.database import SessionLocal, init_db
from jobboard.core.exceptions import Conflict
from jobboard.crud import user as user_crud
from jobboard.models.user import User, UserRole


def create_admin(db: Session, name: str, email: str, password: str) -> User:
    """Create an admin user. Raises Conflict if the email is taken."""
    return user_crud.create(db, name=name, email=email, password=password, role=UserRole.ADMIN)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a job board admin account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("✗ Password must be at least 8 characters")
        return 1

    init_db()
    db = SessionLocal()
    try:
        admin = create_admin(db, args.name, args.email, password)
        print(f"✓ Admin created: {admin.email} (ID: {admin.id})")
        return 0
    except Conflict as e:
        print(f"✗ {e.message}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
