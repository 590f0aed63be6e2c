"""
Notes Service: Note Service Unit Tests
======================================

What:  Tests for NoteService business logic.
How:   NoteStorage is replaced by an AsyncMock; no database involved.

What we test:
    ✅ list/add/delete delegate to storage
    ✅ edit fills blank fields from the stored note
    ✅ edit that changes nothing raises NoChangeError and issues no UPDATE
    ✅ NotFoundError from storage propagates unchanged
"""

import pytest

from notes_api.exceptions import NoChangeError, NotFoundError
from notes_api.models.note import Note
from notes_api.services.note_service import NoteService


class TestNoteServiceDelegation:
    """list_all, add and delete add no semantics of their own."""

    @pytest.mark.asyncio
    async def test_list_all_returns_storage_result(self, mock_storage, sample_note):
        mock_storage.list_all.return_value = [sample_note]

        result = await NoteService(mock_storage).list_all()

        assert result == [sample_note]
        mock_storage.list_all.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_list_all_empty(self, mock_storage):
        mock_storage.list_all.return_value = []

        assert await NoteService(mock_storage).list_all() == []

    @pytest.mark.asyncio
    async def test_add_returns_new_id(self, mock_storage):
        """add should pass both fields through and return the storage id."""
        mock_storage.insert.return_value = 7

        note_id = await NoteService(mock_storage).add("go for a walk", "at 3 pm")

        assert note_id == 7
        mock_storage.insert.assert_awaited_once_with("go for a walk", "at 3 pm")

    @pytest.mark.asyncio
    async def test_delete_delegates(self, mock_storage):
        await NoteService(mock_storage).delete(3)

        mock_storage.delete.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_delete_not_found_propagates(self, mock_storage):
        mock_storage.delete.side_effect = NotFoundError(resource="note", resource_id=3)

        with pytest.raises(NotFoundError):
            await NoteService(mock_storage).delete(3)


class TestNoteServiceEdit:
    """Tests for the edit fallback and no-op detection."""

    def setup_method(self):
        self.current = Note(header="wash the basement", content="immediately", id=1)

    @pytest.mark.asyncio
    async def test_edit_both_fields(self, mock_storage):
        mock_storage.get_by_id.return_value = self.current

        await NoteService(mock_storage).edit("immediately", "wash the basement", 1)

        mock_storage.update.assert_awaited_once_with("immediately", "wash the basement", 1)

    @pytest.mark.asyncio
    async def test_edit_empty_header_keeps_stored_header(self, mock_storage):
        """An empty header means 'leave unchanged', not 'clear'."""
        mock_storage.get_by_id.return_value = self.current

        await NoteService(mock_storage).edit("", "tomorrow", 1)

        mock_storage.update.assert_awaited_once_with("wash the basement", "tomorrow", 1)

    @pytest.mark.asyncio
    async def test_edit_empty_content_keeps_stored_content(self, mock_storage):
        mock_storage.get_by_id.return_value = self.current

        await NoteService(mock_storage).edit("wash the attic", "", 1)

        mock_storage.update.assert_awaited_once_with("wash the attic", "immediately", 1)

    @pytest.mark.asyncio
    async def test_edit_both_empty_raises_no_change(self, mock_storage):
        mock_storage.get_by_id.return_value = self.current

        with pytest.raises(NoChangeError) as exc_info:
            await NoteService(mock_storage).edit("", "", 1)

        assert exc_info.value.note_id == 1
        mock_storage.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_same_values_raises_no_change(self, mock_storage):
        mock_storage.get_by_id.return_value = self.current

        with pytest.raises(NoChangeError):
            await NoteService(mock_storage).edit("wash the basement", "immediately", 1)

        mock_storage.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_same_header_blank_content_raises_no_change(self, mock_storage):
        mock_storage.get_by_id.return_value = self.current

        with pytest.raises(NoChangeError):
            await NoteService(mock_storage).edit("wash the basement", "", 1)

    @pytest.mark.asyncio
    async def test_edit_missing_note_raises_not_found(self, mock_storage):
        """A missing note is reported before any comparison is made."""
        mock_storage.get_by_id.side_effect = NotFoundError(resource="note", resource_id=42)

        with pytest.raises(NotFoundError):
            await NoteService(mock_storage).edit("a", "b", 42)

        mock_storage.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_note_deleted_between_read_and_write(self, mock_storage):
        """NotFoundError from the UPDATE itself also propagates."""
        mock_storage.get_by_id.return_value = self.current
        mock_storage.update.side_effect = NotFoundError(resource="note", resource_id=1)

        with pytest.raises(NotFoundError):
            await NoteService(mock_storage).edit("new header", "", 1)
