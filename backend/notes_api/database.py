"""
Notes Service: Database Engine Helpers
======================================

What:  Async SQLAlchemy engine and session factory constructors, plus the
       declarative Base shared by the ORM models and Alembic.
How:   The storage component calls `create_engine()` and
       `create_session_factory()` when it is opened; nothing here holds a
       live connection at import time.
Who:   Used by `notes_api.storage.sql.SQLNoteStorage` and `migrations/env.py`.

SQLite notes:
    The aiosqlite driver runs every connection on its own worker thread.
    SQLite allows a single writer at a time; concurrent writers wait on the
    file lock for up to `timeout` seconds before failing.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

# Seconds a connection waits on SQLite's write lock
SQLITE_BUSY_TIMEOUT = 5


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models and Alembic.
    """
    pass


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Build the async engine for the notes database.

    pool_pre_ping validates a pooled connection before it is handed out,
    so a database file replaced underneath a running process surfaces as a
    fresh connection instead of an error.
    """
    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        connect_args={"timeout": SQLITE_BUSY_TIMEOUT},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after their transaction ends
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
