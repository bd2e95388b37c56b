# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL. The engine lives on a Database object that
main.py builds once at startup and stores on app.state; request handlers
get a per-request Session through get_db().
"""

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one backing store."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            self.engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        else:
            self.engine = create_engine(
                url,
                pool_pre_ping=True,          # Auto-reconnect if DB connection drops
                pool_size=10,
                max_overflow=20,
                echo=echo,                   # Set True to log all SQL queries (debug only)
            )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """
        Creates all DB tables. Safe to call multiple times.
        Importing app.models registers every table with Base.metadata.
        """
        import app.models  # noqa

        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
