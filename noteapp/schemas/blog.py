"""
Notes Backend — Blog Request/Response Schemas
==============================================

What:  Pydantic models for /api/blogs and the /api/authors aggregate.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from noteapp.schemas.note import OwnerProjection


class BlogCreate(BaseModel):
    """Body of POST /api/blogs."""
    author: Optional[str] = Field(default=None, max_length=255)
    url: str = Field(min_length=1)
    title: str = Field(min_length=1)
    likes: int = Field(default=0, ge=0)


class BlogUpdate(BaseModel):
    """Body of PUT /api/blogs/{id}."""
    likes: int = Field(ge=0)


class BlogResponse(BaseModel):
    id: int
    author: Optional[str] = None
    url: str
    title: str
    likes: int
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogListItem(BaseModel):
    """GET /api/blogs item: owner projected to {name}, foreign key omitted."""
    id: int
    author: Optional[str] = None
    url: str
    title: str
    likes: int
    user: Optional[OwnerProjection] = None

    model_config = {"from_attributes": True}


class AuthorStats(BaseModel):
    """One row of GET /api/authors."""
    author: Optional[str]
    articles: int = Field(description="Number of blogs by this author")
    likes: int = Field(description="Sum of likes over those blogs")
