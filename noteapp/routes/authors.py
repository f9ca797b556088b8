"""
Notes Backend — Authors Route Handler
======================================

What:  GET /api/authors, blog count and like total per author, most liked
       first. Aggregated by the database (GROUP BY), not in Python.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.schemas.blog import AuthorStats
from noteapp.services.blog_service import blog_service

router = APIRouter(prefix="/api", tags=["Authors"])


@router.get("/authors", response_model=List[AuthorStats], summary="Per-author statistics")
async def list_authors(db: AsyncSession = Depends(get_db_session)) -> List[AuthorStats]:
    return await blog_service.author_stats(db)
