import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager

from core.config import BASE_DIR, DATABASE_URL

# Base class for all models
Base = declarative_base()

_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def make_engine(url: str = DATABASE_URL):
    """Build an engine for url.

    In-memory SQLite shares one connection so every session sees the same
    data; file-backed SQLite gets its parent directory created.
    """
    if url in _MEMORY_URLS:
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite:///"):
        db_dir = os.path.dirname(url[len("sqlite:///"):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


def create_tables(bind):
    # Register the table on Base before create_all
    import models.record  # noqa: F401

    Base.metadata.create_all(bind=bind)


# Create engine
engine = make_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


@contextmanager
def get_db_context(session_factory=None):
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            row = db.get(StoredRecord, "dentalUsers")
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
