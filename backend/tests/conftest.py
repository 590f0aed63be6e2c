"""
Notes Service: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Required settings are put into the environment before any
       notes_api import, then fixtures build storages on throwaway SQLite
       files and an HTTPX client talking to the ASGI app in-process.

Fixtures:
    ├── mock_storage: AsyncMock honoring the NoteStorage interface
    ├── sample_note: Transient Note instance for service tests
    ├── storage: SQLNoteStorage on a fresh SQLite file with the schema created
    └── test_client: HTTPX AsyncClient wired to an app using `storage`
"""

import os
import tempfile

# Settings are validated at import time; provide the required values first
os.environ["ENV"] = "local"
os.environ["STORAGE_PATH"] = os.path.join(
    tempfile.mkdtemp(prefix="notes_test_"), "notes.db"
)
os.environ.pop("CONFIG_PATH", None)

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from notes_api.database import Base  # noqa: E402
from notes_api.models.note import Note  # noqa: E402
from notes_api.services.note_service import NoteService  # noqa: E402
from notes_api.storage.base import NoteStorage  # noqa: E402
from notes_api.storage.sql import SQLNoteStorage  # noqa: E402


@pytest.fixture
def mock_storage():
    """
    Provides a mock NoteStorage.

    Usage:
        mock_storage.get_by_id.return_value = sample_note
        await NoteService(mock_storage).edit("", "new", 1)
    """
    return AsyncMock(spec=NoteStorage)


@pytest.fixture
def sample_note():
    """A stored-looking note: id 1, both fields set."""
    return Note(header="wash the basement", content="immediately", id=1)


@pytest_asyncio.fixture
async def storage(tmp_path):
    """
    Provides a SQLNoteStorage backed by a fresh database file.

    The schema is created straight from the ORM metadata; the Alembic
    revision is covered separately in test_migrator.py.
    """
    db_path = tmp_path / "notes.db"
    store = SQLNoteStorage(f"sqlite+aiosqlite:///{db_path}", query_timeout=5.0)
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield store

    await store.close()


@pytest_asyncio.fixture
async def test_client(storage):
    """
    Provides an async HTTP client for endpoint testing.

    ASGITransport does not run the lifespan, so the storage and service
    are attached to app.state here.
    """
    from notes_api.main import create_app

    app = create_app()
    app.state.storage = storage
    app.state.note_service = NoteService(storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
