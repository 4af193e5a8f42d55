#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the relational database and object storage are reachable.
Usage: python scripts/check_connections.py
"""
import sys

from eventgo.db.postgres import test_postgres_connection
from eventgo.db.mongodb import test_mongo_connection
from eventgo.core.config import get_settings


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("EVENTGO - CONNECTION CHECK")
    print("=" * 50)
    ok = True

    print("\n[1] Relational database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    OK: CONNECTED")
    else:
        print("    FAILED")
        ok = False

    print("\n[2] MongoDB (object storage)...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    OK: CONNECTED")
    else:
        print("    FAILED")
        ok = False

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
