"""
Notes Service: SQL Note Storage
===============================

What:  NoteStorage implementation issuing single-statement SQL against the
       `notes` table through async SQLAlchemy.
How:   Owns its engine for its whole lifetime: the engine is built in
       __init__ and disposed by close() (or on leaving `async with`). Every
       public operation goes through `_run()`, which applies the configured
       query deadline and translates driver errors into StorageError.
Who:   Opened by the app lifespan (main.py) and by the storage tests.

Error translation:
    no row on SELECT ............ NotFoundError
    rowcount == 0 on UPDATE/DELETE NotFoundError
    SQLAlchemyError ............. StorageError
    ValueError, OverflowError ... StorageError (driver-side bind errors)
    deadline exceeded ........... StorageError
    CancelledError .............. propagated untouched

Each operation runs in its own short transaction, so a statement is
committed as soon as it succeeds. Nothing spans two statements: an edit that
races a delete on the same id is not guarded here.
"""

import asyncio
import logging
from typing import Any, Awaitable, List, Optional, TypeVar

from sqlalchemy import select, text, update, delete
from sqlalchemy.exc import SQLAlchemyError

from notes_api.config import Settings
from notes_api.database import create_engine, create_session_factory
from notes_api.exceptions import NotFoundError, StorageError
from notes_api.models.note import Note
from notes_api.storage.base import NoteStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLNoteStorage(NoteStorage):
    """
    Async SQLAlchemy storage for notes.

    Usage:
        async with SQLNoteStorage.from_settings(settings) as storage:
            note_id = await storage.insert("wash the basement", "immediately")
    """

    def __init__(
        self,
        database_url: str,
        query_timeout: Optional[float] = None,
        echo: bool = False,
    ):
        """
        Args:
            database_url: Async SQLAlchemy URL (sqlite+aiosqlite:///path).
            query_timeout: Seconds each operation may take; None waits forever.
            echo: Log every SQL statement.
        """
        self.engine = create_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)
        self._query_timeout = query_timeout
        logger.info("Storage opened: %s", self.engine.url.render_as_string(hide_password=True))

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLNoteStorage":
        return cls(
            settings.database_url,
            query_timeout=settings.query_timeout_or_none,
            echo=settings.db_echo,
        )

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def close(self) -> None:
        """Closes every pooled connection. The storage is unusable afterwards."""
        await self.engine.dispose()
        logger.info("Storage closed")

    async def __aenter__(self) -> "SQLNoteStorage":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ── Data Operations ───────────────────────────────────────────────────

    async def list_all(self) -> List[Note]:
        return await self._run("list_all", self._list_all())

    async def get_by_id(self, note_id: int) -> Note:
        return await self._run("get_by_id", self._get_by_id(note_id))

    async def insert(self, header: str, content: str) -> int:
        return await self._run("insert", self._insert(header, content))

    async def update(self, header: str, content: str, note_id: int) -> None:
        await self._run("update", self._update(header, content, note_id))

    async def delete(self, note_id: int) -> None:
        await self._run("delete", self._delete(note_id))

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising."""
        try:
            await self._run("ping", self._ping())
            return True
        except StorageError:
            return False

    # ── Statement Implementations ─────────────────────────────────────────

    async def _list_all(self) -> List[Note]:
        async with self._session_factory() as session:
            result = await session.execute(select(Note).order_by(Note.id))
            return list(result.scalars().all())

    async def _get_by_id(self, note_id: int) -> Note:
        async with self._session_factory() as session:
            result = await session.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def _insert(self, header: str, content: str) -> int:
        async with self._session_factory.begin() as session:
            note = Note(header=header, content=content)
            session.add(note)
            # flush assigns the autoincrement id inside the transaction
            await session.flush()
            note_id = note.id

        logger.debug("Inserted note %d", note_id)
        return note_id

    async def _update(self, header: str, content: str, note_id: int) -> None:
        async with self._session_factory.begin() as session:
            result = await session.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(header=header, content=content)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount

        if affected == 0:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.debug("Updated note %d", note_id)

    async def _delete(self, note_id: int) -> None:
        async with self._session_factory.begin() as session:
            result = await session.execute(
                delete(Note)
                .where(Note.id == note_id)
                .execution_options(synchronize_session=False)
            )
            affected = result.rowcount

        if affected == 0:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.debug("Deleted note %d", note_id)

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    # ── Deadline & Error Translation ──────────────────────────────────────

    async def _run(self, op: str, operation: Awaitable[T]) -> T:
        """
        Awaits one storage operation under the query deadline.

        NotFoundError raised by the operation passes through unchanged.
        Cancellation of the calling task cancels the operation and is
        re-raised as-is.
        """
        try:
            return await asyncio.wait_for(operation, timeout=self._query_timeout)
        except asyncio.TimeoutError:
            logger.error("Storage operation %s exceeded %.2fs", op, self._query_timeout)
            raise StorageError(
                message="The storage did not answer in time. Please try again later.",
                context={"op": op, "timeout": self._query_timeout},
            )
        except SQLAlchemyError as e:
            logger.error("Storage operation %s failed: %s", op, str(e))
            raise StorageError(
                context={"op": op, "original_error": type(e).__name__},
            ) from e
        except (ValueError, OverflowError) as e:
            # sqlite3 raises these unwrapped while binding parameters
            logger.error("Storage operation %s rejected its arguments: %s", op, str(e))
            raise StorageError(
                context={"op": op, "original_error": type(e).__name__},
            ) from e
