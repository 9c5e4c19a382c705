"""
Database Configuration
======================

This module sets up:
1. SQLAlchemy engine (connection to PostgreSQL, or SQLite for local runs)
2. SessionLocal (database session factory)
3. Base (declarative base for models)
4. get_db (per-request session dependency for FastAPI)

One request = one session. Sessions are not thread-safe, so never share
one between requests.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite needs check_same_thread=False because FastAPI runs sync
    endpoints in a threadpool. An in-memory SQLite database only lives as
    long as its connection, so it is pinned to a single StaticPool
    connection. Foreign keys are switched on for every SQLite connection
    so it rejects the same rows PostgreSQL does.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, echo=echo, **kwargs)
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Test connections before use; survives DB restarts
        echo=echo,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# autocommit=False: nothing is written until session.commit()
# autoflush=False: we decide when in-memory changes are flushed
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# All database models inherit from this Base class
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
