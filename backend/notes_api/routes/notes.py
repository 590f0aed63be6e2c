"""
Notes Service: Notes Route Handlers
===================================

What:  CRUD over notes, all on path "/" and told apart by method.
How:   Decodes the JSON body into a request schema, calls NoteService,
       encodes the result. Errors are raised as exceptions and turned into
       plain-text responses by the handlers registered in main.py.

Routes:
    GET    /   → 200 [{header, content, id}, ...]
    POST   /   → 200 {id}          | 400 | 500
    PATCH  /   → 200 (empty body)  | 400 | 404 | 500
    DELETE /   → 200 (empty body)  | 400 | 404 | 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from notes_api.dependencies import get_note_service
from notes_api.exceptions import ValidationError
from notes_api.schemas.note import (
    NoteCreateRequest,
    NoteCreatedResponse,
    NoteDeleteRequest,
    NoteEditRequest,
    NoteResponse,
)
from notes_api.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

# Plain-text error bodies, documented once for every route
TEXT_ERROR = {"content": {"text/plain": {"schema": {"type": "string"}}}}


@router.get(
    "/",
    response_model=List[NoteResponse],
    responses={500: {"description": "Storage error", **TEXT_ERROR}},
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """Returns every note as a bare JSON array, oldest first."""
    notes = await service.list_all()
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "/",
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Malformed body or empty header", **TEXT_ERROR},
        500: {"description": "Storage error", **TEXT_ERROR},
    },
    summary="Create a note",
)
async def add_note(
    body: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteCreatedResponse:
    """
    Create a note and return its id.

    The header must contain at least one character; content may be empty.
    """
    if body.header == "":
        raise ValidationError(
            message="Header must contain any characters",
            field="header",
        )

    note_id = await service.add(body.header, body.content)
    return NoteCreatedResponse(id=note_id)


@router.patch(
    "/",
    response_class=Response,
    responses={
        200: {"description": "Note updated (empty body)"},
        400: {"description": "Malformed body or nothing to change", **TEXT_ERROR},
        404: {"description": "Note not found", **TEXT_ERROR},
        500: {"description": "Storage error", **TEXT_ERROR},
    },
    summary="Edit a note",
)
async def edit_note(
    body: NoteEditRequest,
    service: NoteService = Depends(get_note_service),
) -> Response:
    """
    Edit header and/or content of a note.

    An empty field keeps its stored value. Submitting the stored values
    (or nothing) is rejected with 400.
    """
    await service.edit(body.header, body.content, body.id)
    return Response(status_code=200)


@router.delete(
    "/",
    response_class=Response,
    responses={
        200: {"description": "Note deleted (empty body)"},
        400: {"description": "Malformed body", **TEXT_ERROR},
        404: {"description": "Note not found", **TEXT_ERROR},
        500: {"description": "Storage error", **TEXT_ERROR},
    },
    summary="Delete a note",
)
async def delete_note(
    body: NoteDeleteRequest,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete(body.id)
    return Response(status_code=200)
