"""
Notes Backend — Blogs Route Handlers
=====================================

What:  CRUD endpoints for blogs, the blog variant of notes.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.database import get_db_session
from noteapp.middleware.auth import current_user
from noteapp.middleware.lookup import find_blog
from noteapp.models.blog import Blog
from noteapp.models.user import User
from noteapp.schemas.blog import BlogCreate, BlogListItem, BlogResponse, BlogUpdate
from noteapp.schemas.common import ErrorResponse
from noteapp.services.blog_service import blog_service

router = APIRouter(prefix="/api", tags=["Blogs"])


@router.get(
    "/blogs",
    response_model=List[BlogListItem],
    summary="List blogs",
    description="Search is case-insensitive over title and author. `sort=likes` puts the most liked first.",
)
async def list_blogs(
    search: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None, description="'likes' for most liked first"),
    db: AsyncSession = Depends(get_db_session),
) -> List[BlogListItem]:
    params = {}
    if search is not None:
        params["search"] = search
    if sort is not None:
        params["sort"] = sort
    blogs = await blog_service.list_blogs(db, params)
    return [BlogListItem.model_validate(blog) for blog in blogs]


@router.post(
    "/blogs",
    status_code=201,
    response_model=BlogResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)
async def create_blog(
    payload: BlogCreate,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    blog = await blog_service.create_blog(db, payload, owner=user)
    return BlogResponse.model_validate(blog)


@router.get(
    "/blogs/{blog_id}",
    response_model=BlogResponse,
    responses={404: {"description": "Blog not found", "model": ErrorResponse}},
)
async def get_blog(
    blog_id: int,
    blog: Optional[Blog] = Depends(find_blog),
) -> BlogResponse:
    return BlogResponse.model_validate(blog_service.require(blog, blog_id))


@router.put(
    "/blogs/{blog_id}",
    response_model=BlogResponse,
    responses={404: {"description": "Blog not found", "model": ErrorResponse}},
    summary="Set a blog's like count",
)
async def update_blog(
    blog_id: int,
    payload: BlogUpdate,
    blog: Optional[Blog] = Depends(find_blog),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    blog = await blog_service.update_likes(db, blog_service.require(blog, blog_id), payload)
    return BlogResponse.model_validate(blog)


@router.delete(
    "/blogs/{blog_id}",
    status_code=204,
    responses={403: {"description": "Caller did not create this blog", "model": ErrorResponse}},
)
async def delete_blog(
    blog: Optional[Blog] = Depends(find_blog),
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.delete_blog(db, blog, acting=user)
    return Response(status_code=204)
