"""
Database connection and session management module.

The laundry store originally ran on MySQL (``mysql+pymysql://``); PostgreSQL
works the same way and SQLite is the local development / test fallback.

The engine's connection pool is the only state shared between requests.
Routes receive a session through the ``get_db`` dependency and pass it
down to the service layer explicitly.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from laundry.config import DATABASE_URL, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT

SERVER_BACKENDS = ("mysql", "postgresql")


def is_sqlite(url: str = DATABASE_URL) -> bool:
    return url.startswith("sqlite")


# ──────────────────────────────────────────────────────────────
# Pool settings per backend.
# Server databases get a fixed pool of DB_POOL_SIZE connections;
# callers beyond that wait up to DB_POOL_TIMEOUT seconds for one.
# SQLite has no pool sizing and is opened from FastAPI's
# threadpool, so it only needs the thread check disabled.
# ──────────────────────────────────────────────────────────────
def engine_options(url: str) -> dict:
    """Keyword arguments for ``create_engine`` given a database URL."""
    if url.startswith(SERVER_BACKENDS):
        return {
            "echo": False,
            "pool_size": DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
            "pool_timeout": DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }
    if is_sqlite(url):
        return {"echo": False, "connect_args": {"check_same_thread": False}}
    return {"echo": False}


engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))


def _enforce_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if is_sqlite():
    event.listen(engine, "connect", _enforce_foreign_keys)

# Sessions never autoflush; services flush when they need generated ids
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for the Students, Laundry_Records and Laundry_Record_Details tables."""


def get_db():
    """
    FastAPI dependency yielding one session per request.

    The connection goes back to the pool when the request finishes,
    whether the handler returned or raised.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ──────────────────────────────────────────────────────────────
# Schema helpers for SQLite and the test suite. MySQL and
# PostgreSQL schemas are owned by the Alembic migrations.
# ──────────────────────────────────────────────────────────────
def create_tables():
    Base.metadata.create_all(bind=engine)


def drop_tables():
    Base.metadata.drop_all(bind=engine)
