"""
Notes Service: Note Service (Business Logic)
============================================

What:  Thin business layer over NoteStorage.
How:   list_all, add and delete delegate straight to storage. edit fetches
       the current note, fills blank fields from it and refuses edits that
       would change nothing.
Who:   Called by the route handlers in routes/notes.py.

Edit contract:
    An empty string for header or content means "keep the stored value".
    A field therefore cannot be cleared through edit. If, after filling the
    blanks, both fields equal the stored ones, NoChangeError is raised and no
    UPDATE is issued.

NoteService holds no state besides its storage reference; it is built once
in the app lifespan and shared by all requests.
"""

import logging
from typing import List

from notes_api.exceptions import NoChangeError
from notes_api.models.note import Note
from notes_api.storage.base import NoteStorage

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Errors from storage (NotFoundError, StorageError) propagate untouched;
    NoChangeError is the only error originating here.
    """

    def __init__(self, storage: NoteStorage):
        self.storage = storage

    async def list_all(self) -> List[Note]:
        return await self.storage.list_all()

    async def add(self, header: str, content: str) -> int:
        note_id = await self.storage.insert(header, content)
        logger.info("Note %d created", note_id)
        return note_id

    async def edit(self, header: str, content: str, note_id: int) -> None:
        """
        Update a note, keeping stored values for blank fields.

        Args:
            header: New header, or "" to keep the current one
            content: New content, or "" to keep the current one
            note_id: Identifier of the note to edit

        Raises:
            NotFoundError: No note has this id
            NoChangeError: The edit would leave the note unchanged
            StorageError: Reading or writing failed
        """
        current = await self.storage.get_by_id(note_id)

        if header == "":
            header = current.header
        if content == "":
            content = current.content

        if header == current.header and content == current.content:
            raise NoChangeError(note_id)

        await self.storage.update(header, content, note_id)
        logger.info("Note %d edited", note_id)

    async def delete(self, note_id: int) -> None:
        await self.storage.delete(note_id)
        logger.info("Note %d deleted", note_id)
