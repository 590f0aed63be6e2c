"""
Notes Service: FastAPI Dependencies
===================================

What:  Accessors for the per-process components built by the lifespan.
How:   The lifespan stores the opened storage and the service on
       `app.state`; route handlers receive them via Depends().
Who:   Used by routes/notes.py and routes/health.py, overridden in tests.

Example usage in a route:
    @router.get("/")
    async def list_notes(service: NoteService = Depends(get_note_service)):
        return await service.list_all()
"""

from fastapi import Request

from notes_api.services.note_service import NoteService
from notes_api.storage.base import NoteStorage


def get_storage(request: Request) -> NoteStorage:
    return request.app.state.storage


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service
