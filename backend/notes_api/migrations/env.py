"""
Alembic Migration Environment
=============================

What:  Runs the notes revisions against the SQLite file.
How:   The database URL comes from the Config built by notes_api.migrator;
       a bare `alembic` CLI run falls back to the application settings.
       Online migrations open the same async engine the service uses
       (notes_api.database.create_engine, so they wait on the SQLite write
       lock while the service is running) and hand a sync connection to
       Alembic through run_sync().

SQLite specifics:
    - render_as_batch: SQLite cannot ALTER most column properties, so
      autogenerated column changes are emitted as table copies.
    - compare_server_default: `notes.content` relies on DEFAULT ''.
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import context

from notes_api.database import Base, create_engine

# Registers the notes table on Base.metadata for --autogenerate
from notes_api.models.note import Note  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("notes_api.migrations")

target_metadata = Base.metadata


def _database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url

    from notes_api.config import settings

    return settings.database_url


def _skip_empty_autogenerate(migration_context, revision, directives) -> None:
    """Do not write a revision file when autogenerate found no changes."""
    if getattr(config.cmd_opts, "autogenerate", False):
        script = directives[0]
        if script.upgrade_ops.is_empty():
            directives[:] = []
            logger.info("Schema matches the models; no revision generated")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        compare_server_default=True,
        process_revision_directives=_skip_empty_autogenerate,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    _configure(connection=connection)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_engine(_database_url())
    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
