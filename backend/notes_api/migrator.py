"""
Notes Service: Schema Migrator
==============================

What:  Applies the Alembic revisions in `migrations_path` to the database at
       `storage_path`, up to head.
How:   Builds an Alembic Config in code (no alembic.ini needed) and runs
       `alembic upgrade head`. env.py takes the database URL from the config
       built here.

Usage:
    python -m notes_api.migrator --config-path ./config/local.yaml
    CONFIG_PATH=./config/local.yaml notes-migrate
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

from notes_api.cli import apply_config_path_arg

if TYPE_CHECKING:
    from notes_api.config import Settings

logger = logging.getLogger(__name__)


def build_alembic_config(settings: "Settings") -> Config:
    """Alembic Config pointing at the configured scripts and database."""
    if not Path(settings.migrations_path).is_dir():
        raise ValueError(f"migrations_path '{settings.migrations_path}' is not a directory")

    config = Config()
    config.set_main_option("script_location", settings.migrations_path)
    config.set_main_option("sqlalchemy.url", settings.database_url)
    return config


def current_revision(settings: "Settings") -> Optional[str]:
    """Revision the database is at, or None for an empty database."""
    # Sync driver: this runs outside any event loop
    engine = create_engine(f"sqlite:///{settings.storage_path}")
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()


def migrate(settings: "Settings") -> bool:
    """
    Upgrade the database to the latest revision.

    Returns:
        True if revisions were applied, False if it was already at head.
    """
    config = build_alembic_config(settings)
    head = ScriptDirectory.from_config(config).get_current_head()

    if current_revision(settings) == head:
        logger.info("No migrations to apply (at %s)", head)
        return False

    command.upgrade(config, "head")
    logger.info("Migrations applied, database at %s", head)
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    apply_config_path_arg("Apply pending schema migrations.", argv)

    from notes_api.config import settings
    from notes_api.main import setup_logging

    setup_logging()
    try:
        migrate(settings)
    except ValueError as e:
        logger.error("Cannot migrate: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
