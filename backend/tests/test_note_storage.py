"""
Notes Service: SQL Storage Tests
================================

What:  Tests for SQLNoteStorage against a real SQLite file.
How:   Each test gets a fresh database from the `storage` fixture.

What we test:
    ✅ list/get/insert/update/delete round trips
    ✅ NotFoundError for missing ids (never StorageError)
    ✅ ids are never reused after a delete
    ✅ driver errors and deadline expiry become StorageError
    ✅ cancellation reaches the caller as CancelledError
"""

import asyncio

import pytest

from notes_api.exceptions import NotFoundError, StorageError
from notes_api.storage.sql import SQLNoteStorage


class TestStorageReads:

    @pytest.mark.asyncio
    async def test_list_all_empty_store(self, storage):
        """An empty table yields an empty list, not an error."""
        assert await storage.list_all() == []

    @pytest.mark.asyncio
    async def test_insert_then_get(self, storage):
        note_id = await storage.insert("wash the basement", "immediately")

        note = await storage.get_by_id(note_id)

        assert note.id == note_id
        assert note.header == "wash the basement"
        assert note.content == "immediately"

    @pytest.mark.asyncio
    async def test_first_id_is_one(self, storage):
        assert await storage.insert("first", "") == 1

    @pytest.mark.asyncio
    async def test_list_all_after_inserts(self, storage):
        """N inserts give N notes, in insertion order, each retrievable by id."""
        ids = [await storage.insert(f"note {i}", f"body {i}") for i in range(5)]

        notes = await storage.list_all()

        assert [n.id for n in notes] == ids
        assert len(set(ids)) == 5
        for note_id in ids:
            fetched = await storage.get_by_id(note_id)
            assert fetched.id == note_id

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, storage):
        with pytest.raises(NotFoundError) as exc_info:
            await storage.get_by_id(99)

        assert exc_info.value.resource_id == 99

    @pytest.mark.asyncio
    async def test_ping(self, storage):
        assert await storage.ping() is True


class TestStorageWrites:

    @pytest.mark.asyncio
    async def test_update_existing(self, storage):
        note_id = await storage.insert("wash the basement", "immediately")

        await storage.update("immediately", "wash the basement", note_id)

        note = await storage.get_by_id(note_id)
        assert note.header == "immediately"
        assert note.content == "wash the basement"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, storage):
        with pytest.raises(NotFoundError):
            await storage.update("h", "c", 12)

    @pytest.mark.asyncio
    async def test_delete_existing(self, storage):
        note_id = await storage.insert("temporary", "")

        await storage.delete(note_id)

        assert await storage.list_all() == []
        with pytest.raises(NotFoundError):
            await storage.get_by_id(note_id)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, storage):
        with pytest.raises(NotFoundError):
            await storage.delete(1)

    @pytest.mark.asyncio
    async def test_delete_twice_raises_not_found(self, storage):
        note_id = await storage.insert("once", "")
        await storage.delete(note_id)

        with pytest.raises(NotFoundError):
            await storage.delete(note_id)

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, storage):
        first = await storage.insert("a", "")
        await storage.delete(first)

        second = await storage.insert("b", "")

        assert second > first


class TestStorageFailures:

    @pytest.mark.asyncio
    async def test_missing_table_raises_storage_error(self, tmp_path):
        """A driver error is wrapped, not leaked and not reported as NotFound."""
        async with SQLNoteStorage(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}") as store:
            with pytest.raises(StorageError) as exc_info:
                await store.list_all()

        assert exc_info.value.context["op"] == "list_all"

    @pytest.mark.asyncio
    async def test_unreachable_database_ping_false(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'notes.db'}"
        async with SQLNoteStorage(url) as store:
            assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_unencodable_text_raises_storage_error(self, storage):
        with pytest.raises(StorageError) as exc_info:
            await storage.insert("\ud800", "")

        assert exc_info.value.context["op"] == "insert"
        assert await storage.list_all() == []

    @pytest.mark.asyncio
    async def test_out_of_range_id_raises_storage_error(self, storage):
        """Never leaks the driver's OverflowError."""
        for call in (
            lambda: storage.get_by_id(2**63),
            lambda: storage.update("h", "c", 2**63),
            lambda: storage.delete(2**63),
        ):
            with pytest.raises(StorageError):
                await call()

    @pytest.mark.asyncio
    async def test_deadline_exceeded_raises_storage_error(self, storage):
        async def slow_list():
            await asyncio.sleep(5)
            return []

        storage._query_timeout = 0.01
        storage._list_all = slow_list

        with pytest.raises(StorageError) as exc_info:
            await storage.list_all()

        assert exc_info.value.context["timeout"] == 0.01

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, storage):
        started = asyncio.Event()

        async def slow_get(note_id):
            started.set()
            await asyncio.sleep(5)

        storage._get_by_id = slow_get

        task = asyncio.create_task(storage.get_by_id(1))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
