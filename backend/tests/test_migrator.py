"""
Notes Service: Migrator Tests
=============================

What:  Tests for applying the Alembic revisions to a fresh database.
How:   Runs the real revision scripts against a temporary SQLite file and
       inspects the result with a sync engine.
"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

import notes_api
from notes_api.config import DEFAULT_MIGRATIONS_PATH, Settings
from notes_api.migrator import build_alembic_config, current_revision, migrate


def make_settings(tmp_path, **overrides):
    values = {"env": "local", "storage_path": str(tmp_path / "notes.db")}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestMigrate:

    def test_creates_notes_table(self, tmp_path):
        settings = make_settings(tmp_path)

        assert migrate(settings) is True

        engine = create_engine(f"sqlite:///{settings.storage_path}")
        try:
            inspector = inspect(engine)
            assert "notes" in inspector.get_table_names()
            columns = {c["name"] for c in inspector.get_columns("notes")}
            assert columns == {"header", "content", "id"}
        finally:
            engine.dispose()

    def test_second_run_is_a_no_op(self, tmp_path):
        settings = make_settings(tmp_path)
        migrate(settings)

        assert migrate(settings) is False
        assert current_revision(settings) == "001"

    def test_empty_database_has_no_revision(self, tmp_path):
        assert current_revision(make_settings(tmp_path)) is None

    def test_missing_migrations_dir_rejected(self, tmp_path):
        settings = make_settings(tmp_path, migrations_path=str(tmp_path / "nowhere"))

        with pytest.raises(ValueError, match="not a directory"):
            build_alembic_config(settings)


class TestDefaultMigrationsPath:

    def test_scripts_installed_with_package(self):
        """The default location lives inside the notes_api package."""
        scripts = Path(DEFAULT_MIGRATIONS_PATH)

        assert scripts.parent == Path(notes_api.__file__).resolve().parent
        assert (scripts / "env.py").is_file()
        assert (scripts / "versions" / "001_create_notes_table.py").is_file()

    def test_settings_default_to_packaged_scripts(self, tmp_path):
        settings = make_settings(tmp_path)

        assert settings.migrations_path == DEFAULT_MIGRATIONS_PATH
        assert migrate(settings) is True
