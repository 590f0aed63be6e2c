"""
Notes Service: Abstract Note Storage Interface
==============================================

What:  Abstract base class defining the storage contract for notes.
How:   Concrete implementations inherit from NoteStorage and implement the
       five data operations. NoteService talks to nothing else.
Who:   Implemented by SQLNoteStorage; replaced by AsyncMock in unit tests.
"""

from abc import ABC, abstractmethod
from typing import List

from notes_api.models.note import Note


class NoteStorage(ABC):
    """
    Abstract interface for note persistence.

    Contract:
        - A missing row is reported as NotFoundError, for reads and for
          update/delete that affect zero rows
        - Every other failure is wrapped in StorageError
        - Cancelling the awaiting task cancels the operation
    """

    @abstractmethod
    async def list_all(self) -> List[Note]:
        """
        Return every stored note in insertion order.

        An empty store yields an empty list, never an error.
        """
        ...

    @abstractmethod
    async def get_by_id(self, note_id: int) -> Note:
        """
        Return the note with the given id.

        Raises:
            NotFoundError: No note has this id.
            StorageError: The query failed.
        """
        ...

    @abstractmethod
    async def insert(self, header: str, content: str) -> int:
        """Store a new note and return the id assigned by the database."""
        ...

    @abstractmethod
    async def update(self, header: str, content: str, note_id: int) -> None:
        """
        Overwrite header and content of an existing note.

        Raises:
            NotFoundError: No row was affected.
            StorageError: The statement failed.
        """
        ...

    @abstractmethod
    async def delete(self, note_id: int) -> None:
        """
        Remove a note.

        Raises:
            NotFoundError: No row was affected.
            StorageError: The statement failed.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check used by the health endpoint."""
        ...
