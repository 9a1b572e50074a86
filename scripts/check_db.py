#!/usr/bin/env python3
# scripts/check_db.py - Check database connection and status
import sys
import os

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings  # noqa: E402
from app.core.db import DatabaseManager  # noqa: E402
from app.models import Base  # noqa: E402


def check_database_connection(url: str = None) -> bool:
    """Check if database connection is working and report record counts"""
    manager = DatabaseManager(url or settings.DATABASE_URL)

    print("Database Connection Check")
    print("=" * 40)

    info = manager.connection_info()
    print(f"Database: {info['name']}")
    print(f"Host: {info['host']}")
    print("-" * 40)

    if info["status"] != "Connected":
        print("❌ Connection failed")
        print("\nTroubleshooting:")
        print("1. Verify DATABASE_URL in your .env file")
        print("2. Check that the database server is running")
        print("3. Run migrations: alembic upgrade head")
        return False

    print("✅ Connection successful!")

    try:
        existing = set(inspect(manager.engine).get_table_names())
        if not existing:
            print("📝 Database is empty - ready for initial migration")
            return True

        print("📋 Existing tables found:")
        with manager.engine.connect() as conn:
            for table in Base.metadata.sorted_tables:
                if table.name not in existing:
                    print(f"  - {table.name}: missing")
                    continue
                count = conn.execute(select(func.count()).select_from(table)).scalar()
                print(f"  - {table.name}: {count} rows")
        return True

    except SQLAlchemyError as e:
        print(f"❌ Unexpected error: {e}")
        return False
    finally:
        manager.close()


if __name__ == "__main__":
    if check_database_connection():
        sys.exit(0)
    else:
        sys.exit(1)
