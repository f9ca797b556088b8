"""
Notes Backend — Note Service
=============================

What:  Business logic for listing, creating, updating and deleting notes.
How:   Stateless; receives the request's AsyncSession per call. Filtering is
       delegated to the query builder; the entity lookup for single-note
       routes happens in the `find_note` dependency before these run.
Who:   Called by the /api/notes route handlers.

Ownership rule:
    A note is created with the authenticated user as owner and can only be
    deleted by that same user.
"""

import logging
from datetime import datetime, timezone
from typing import List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from noteapp.exceptions import AuthorizationError, DatabaseError, NotFoundError
from noteapp.models.note import Note
from noteapp.models.user import User
from noteapp.schemas.note import NoteCreate, NoteUpdate
from noteapp.services.query_builder import (
    NOTE_ORDERINGS,
    build_note_filters,
    build_ordering,
)

logger = logging.getLogger(__name__)


class NoteService:
    """
    Responsibilities:
        - list_notes(): filtered listing with the owner loaded for projection
        - create_note(): stamps owner and creation date
        - update_note(): sets the `important` flag
        - delete_note(): owner-only, idempotent for missing notes
    """

    async def list_notes(self, db: AsyncSession, params: Mapping[str, str]) -> List[Note]:
        """
        List notes matching the query parameters.

        Query shape (all filters present):
            SELECT ... FROM notes
            WHERE important IS :important AND content LIKE '%' || :search || '%'
            ORDER BY date DESC, id
        """
        filters = build_note_filters(params)
        ordering = build_ordering(params, NOTE_ORDERINGS, Note.id.asc())

        query = select(Note).options(selectinload(Note.user))
        if filters:
            query = query.where(*filters)
        query = query.order_by(*ordering)

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return list(result.scalars().all())

    def require(self, note: Optional[Note], note_id: int) -> Note:
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def create_note(self, db: AsyncSession, data: NoteCreate, owner: User) -> Note:
        note = Note(
            content=data.content,
            important=data.important,
            date=datetime.now(timezone.utc),
            user_id=owner.id,
        )
        db.add(note)
        await db.flush()
        logger.info("Note %d created by user %d", note.id, owner.id)
        return note

    async def update_note(self, db: AsyncSession, note: Note, data: NoteUpdate) -> Note:
        note.important = data.important
        await db.flush()
        return note

    async def delete_note(self, db: AsyncSession, note: Optional[Note], acting: User) -> None:
        """
        Delete a note owned by `acting`.

        A missing note is a no-op (the route still answers 204).

        Raises:
            AuthorizationError: the note belongs to someone else, or to nobody
        """
        if note is None:
            return
        if note.user_id != acting.id:
            raise AuthorizationError("only the owner can delete a note")

        await db.delete(note)
        await db.flush()
        logger.info("Note %d deleted by user %d", note.id, acting.id)


note_service = NoteService()
