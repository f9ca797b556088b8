"""
Notes Backend — Notes Route Handlers
=====================================

What:  CRUD endpoints for notes.
How:   Auth and entity lookup come in as dependencies; filtering and
       ownership rules live in NoteService.

Projection:
    GET /api/notes returns NoteListItem: no `user_id`, owner as {name}.
    Single-note endpoints return NoteResponse, which includes `user_id`.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.middleware.auth import current_user
from noteapp.middleware.lookup import find_note
from noteapp.models.note import Note
from noteapp.models.user import User
from noteapp.schemas.common import ErrorResponse
from noteapp.schemas.note import NoteCreate, NoteListItem, NoteResponse, NoteUpdate
from noteapp.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteListItem],
    responses={400: {"description": "Malformed filter", "model": ErrorResponse}},
    summary="List notes",
)
async def list_notes(
    important: Optional[str] = Query(
        default=None,
        description="'true' or 'false'. Omit to match both.",
    ),
    search: Optional[str] = Query(
        default=None,
        description="Substring the content must contain. Empty matches everything.",
    ),
    sort: Optional[str] = Query(
        default=None,
        description="'date' for newest first. Omit for creation order.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteListItem]:
    params = {
        name: value
        for name, value in (("important", important), ("search", search), ("sort", sort))
        if value is not None
    }
    notes = await note_service.list_notes(db, params)
    return [NoteListItem.model_validate(note) for note in notes]


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid note", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Create a note owned by the caller",
)
async def create_note(
    payload: NoteCreate,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_service.create_note(db, payload, owner=user)
    return NoteResponse.model_validate(note)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note",
)
async def get_note(
    note_id: int,
    note: Optional[Note] = Depends(find_note),
) -> NoteResponse:
    return NoteResponse.model_validate(note_service.require(note, note_id))


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Set a note's important flag",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    note: Optional[Note] = Depends(find_note),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_service.update_note(db, note_service.require(note, note_id), payload)
    return NoteResponse.model_validate(note)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Caller is not the owner", "model": ErrorResponse},
    },
    summary="Delete a note owned by the caller",
)
async def delete_note(
    note: Optional[Note] = Depends(find_note),
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note, acting=user)
    return Response(status_code=204)
