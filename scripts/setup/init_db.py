"""
Initialize database — creates all tables and the first executive account.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--username NAME] [--password SECRET]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import Database
from app.models.enums import Role
from app.models.user import User
from app.services import user_service


def main():
    parser = argparse.ArgumentParser(description="Create tables and bootstrap an executive user")
    parser.add_argument("--username", default=settings.BOOTSTRAP_ADMIN_USERNAME)
    parser.add_argument("--password", default=settings.BOOTSTRAP_ADMIN_PASSWORD)
    args = parser.parse_args()

    print("Allocation Tracker DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    db = Database(settings.DATABASE_URL)

    # Test connection
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except SQLAlchemyError as e:
        print(f"Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running and DATABASE_URL is set.")
        sys.exit(1)

    print("\nCreating tables...")
    db.create_tables()
    tables = sorted(inspect(db.engine).get_table_names())
    print(f"Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    session = db.SessionLocal()
    try:
        if session.query(User).filter(User.username == args.username).first():
            print(f"\nUser '{args.username}' already exists, skipping bootstrap account")
        else:
            user_service.create_user(session, args.username, args.password, Role.EXECUTIVE)
            print(f"\nCreated executive account '{args.username}'")
            if args.password == "CHANGE_ME":
                print("   Change this password before going live!")
    finally:
        session.close()

    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT}")


if __name__ == "__main__":
    main()
