"""
Notes Backend — Blog Service
=============================

What:  Business logic for blogs and the per-author statistics.
Who:   Called by the /api/blogs and /api/authors route handlers.
"""

import logging
from typing import List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from noteapp.exceptions import AuthorizationError, NotFoundError
from noteapp.models.blog import Blog
from noteapp.models.user import User
from noteapp.schemas.blog import AuthorStats, BlogCreate, BlogUpdate
from noteapp.services.query_builder import (
    BLOG_ORDERINGS,
    authors_aggregate,
    build_blog_filters,
    build_ordering,
)

logger = logging.getLogger(__name__)


class BlogService:

    async def list_blogs(self, db: AsyncSession, params: Mapping[str, str]) -> List[Blog]:
        filters = build_blog_filters(params)
        ordering = build_ordering(params, BLOG_ORDERINGS, Blog.id.asc())

        query = select(Blog).options(selectinload(Blog.user))
        if filters:
            query = query.where(*filters)
        result = await db.execute(query.order_by(*ordering))
        return list(result.scalars().all())

    def require(self, blog: Optional[Blog], blog_id: int) -> Blog:
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(blog_id))
        return blog

    async def create_blog(self, db: AsyncSession, data: BlogCreate, owner: User) -> Blog:
        blog = Blog(
            author=data.author,
            url=data.url,
            title=data.title,
            likes=data.likes,
            user_id=owner.id,
        )
        db.add(blog)
        await db.flush()
        logger.info("Blog %d created by user %d", blog.id, owner.id)
        return blog

    async def update_likes(self, db: AsyncSession, blog: Blog, data: BlogUpdate) -> Blog:
        # Last write wins; concurrent updates are not reconciled
        blog.likes = data.likes
        await db.flush()
        return blog

    async def delete_blog(self, db: AsyncSession, blog: Optional[Blog], acting: User) -> None:
        """Owner-only delete; a missing blog is a no-op."""
        if blog is None:
            return
        if blog.user_id != acting.id:
            raise AuthorizationError("only the creator can delete a blog")

        await db.delete(blog)
        await db.flush()
        logger.info("Blog %d deleted by user %d", blog.id, acting.id)

    async def author_stats(self, db: AsyncSession) -> List[AuthorStats]:
        """Per-author article count and like total, aggregated by the database."""
        result = await db.execute(authors_aggregate())
        return [
            AuthorStats(author=row.author, articles=row.articles, likes=row.likes)
            for row in result
        ]


blog_service = BlogService()
