#!/usr/bin/env python3
"""
Database Check Script

Run this to verify the database connection and see how many rows each
table holds.
Usage: python scripts/check_database.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.db.bootstrap import table_counts
from app.db.postgres import get_engine, test_postgres_connection


def main():
    settings = get_settings()
    setup_logging()
    print("=" * 50)
    print("RESEARCH CONNECT - DATABASE CHECK")
    print("=" * 50)

    print("\n[1] Testing database connection...")
    print(f"    URL: {get_engine().url.render_as_string(hide_password=True)}")
    if not test_postgres_connection():
        print("    ❌ Database: FAILED")
        if settings.mock_fallback:
            print("    ⚠️  The API would serve the in-memory demo dataset")
        sys.exit(1)
    print("    ✅ Database: CONNECTED")

    print("\n[2] Row counts...")
    for table, count in table_counts().items():
        shown = "error" if count is None else count
        print(f"    {table:<20} {shown}")

    print("\n" + "=" * 50)
    print("Database check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
