#!/usr/bin/env python3
"""
Create an admin account. Admins cannot sign up through the API.

Usage: python scripts/create_admin.py admin@example.com "Admin Name"
The password is read from the terminal.
"""
import argparse
import getpass
import sys

from eventgo.core.exceptions import EventGoError
from eventgo.core.passwords import validate_password
from eventgo.db.postgres import get_db_session, init_db
from eventgo.services.account_service import create_account


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an EventGo admin account")
    parser.add_argument("email")
    parser.add_argument("full_name")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    ok, message = validate_password(password)
    if not ok:
        print(message)
        return 1

    init_db()
    try:
        with get_db_session() as db:
            created = create_account(db, email=args.email, password=password,
                                     full_name=args.full_name, role="admin")
    except EventGoError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Admin created: {created['account']['id']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
