"""
Notes Service: Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values are read from (highest priority first) constructor kwargs,
       environment variables, a `.env` file and finally a YAML file whose
       path is given by the CONFIG_PATH environment variable. The result is
       validated once and exposed as the `settings` singleton.
Who:   Imported by the app factory, the storage layer, the migrator and
       Alembic's env.py.
When:  Loaded once at module import time; a missing or invalid required
       value aborts startup.

Example YAML file (CONFIG_PATH=./config/local.yaml):

    env: local
    storage_path: ./storage/notes.db
    port: ":8080"
"""

import os
from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    YamlConfigSettingsSource,
)

# Deployment modes and the log level each one runs at
ENV_LOG_LEVELS = {
    "local": "DEBUG",
    "dev": "DEBUG",
    "prod": "INFO",
}

# Alembic scripts are installed with the package: notes_api/migrations
DEFAULT_MIGRATIONS_PATH = str(Path(__file__).resolve().parent / "migrations")


class Settings(BaseSettings):
    """
    Application settings loaded from the environment or a config file.

    `env` and `storage_path` have no defaults: the service refuses to start
    without them.
    """

    # ── Deployment ────────────────────────────────────────────────────────
    # What: Deployment mode, controls log verbosity (see ENV_LOG_LEVELS)
    env: str = Field(description="Deployment mode: local, dev or prod")

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Ensures env is one of the known deployment modes."""
        lower = v.lower()
        if lower not in ENV_LOG_LEVELS:
            raise ValueError(
                f"Invalid env '{v}'. Must be one of: {sorted(ENV_LOG_LEVELS)}"
            )
        return lower

    # ── Database ──────────────────────────────────────────────────────────
    # What: Location of the SQLite database file
    storage_path: str = Field(description="Path to the SQLite database file")

    # What: Alembic script directory used by the migrator
    migrations_path: str = Field(default=DEFAULT_MIGRATIONS_PATH)

    # What: Deadline in seconds applied to every storage call (0 disables)
    query_timeout: float = Field(default=5.0, ge=0)

    # Echo SQL statements to the log
    db_echo: bool = Field(default=False)

    @field_validator("storage_path", "migrations_path")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL for the configured SQLite file."""
        return f"sqlite+aiosqlite:///{self.storage_path}"

    @property
    def query_timeout_or_none(self) -> Optional[float]:
        """Deadline to hand to asyncio.wait_for; None means wait forever."""
        return self.query_timeout or None

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    @field_validator("port", mode="before")
    @classmethod
    def parse_port(cls, v):
        """Accepts listen addresses written as ':8080' as well as plain ports."""
        if isinstance(v, str):
            return v.strip().lstrip(":")
        return v

    # What: Seconds uvicorn waits for in-flight requests on SIGINT/SIGTERM
    shutdown_timeout: int = Field(default=10, ge=0, le=300)

    @property
    def log_level(self) -> str:
        return ENV_LOG_LEVELS[self.env]

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Adds the YAML file named by CONFIG_PATH as the lowest-priority source.

        Environment variables still win over the file, so a single value can
        be overridden without editing it.
        """
        sources = [init_settings, env_settings, dotenv_settings, file_secret_settings]
        config_path = os.getenv("CONFIG_PATH")
        if config_path:
            if not Path(config_path).is_file():
                raise ValueError(f"Config file '{config_path}' does not exist")
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=config_path))
        return tuple(sources)


# Singleton instance, imported throughout the application
settings = Settings()
