"""
Notes Backend — Entity Lookup Dependencies
===========================================

What:  Fetch the entity named by the `{note_id}` / `{blog_id}` path parameter.
How:   Returns the row, or None when it doesn't exist. The handler decides
       what a missing entity means (404 for reads, 204 for deletes).
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.models.blog import Blog
from noteapp.models.note import Note


async def find_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[Note]:
    return await db.get(Note, note_id)


async def find_blog(
    blog_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[Blog]:
    return await db.get(Blog, blog_id)
