"""
Database connection and session management.
Provides SQLAlchemy engine, session, and base class for the append-only record tables.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

def _connect_args(database_url: str) -> dict:
    """SQLite connections are shared with the event loop thread pool."""
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

# Create SQLAlchemy engine for database connection
engine = create_engine(settings.database_url, connect_args=_connect_args(settings.database_url))

# Create session factory for database sessions
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# Create base class for declarative models
Base = declarative_base()
