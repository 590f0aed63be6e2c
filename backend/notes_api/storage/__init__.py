# Storage package init
"""
Notes Service: Storage Layer
============================

What:  Persistence for notes, behind a narrow abstract interface.
How:   The service layer depends only on `NoteStorage`; the app lifespan
       opens the concrete `SQLNoteStorage` and hands it to `NoteService`.

Storage Inventory:
    - NoteStorage (abstract): list/get/insert/update/delete contract
    - SQLNoteStorage: async SQLAlchemy implementation over SQLite
"""

from notes_api.storage.base import NoteStorage
from notes_api.storage.sql import SQLNoteStorage

__all__ = ["NoteStorage", "SQLNoteStorage"]
