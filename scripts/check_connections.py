#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database is reachable and the tables exist.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import inspect

from portal.core.config import get_settings
from portal.db.postgres import engine, init_db, test_postgres_connection


def main():
    settings = get_settings()
    print("=" * 50)
    print("PLACEMENT PORTAL - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if not test_postgres_connection():
        print("    ❌ Database: FAILED")
        return 1
    print("    ✅ Database: CONNECTED")

    print("\n[2] Checking tables...")
    init_db()
    for table in ("users", "profiles", "listings", "applications"):
        found = inspect(engine).has_table(table)
        print(f"    {'✅' if found else '❌'} {table}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
