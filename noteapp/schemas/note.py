"""
Notes Backend — Note Request/Response Schemas
==============================================

What:  Pydantic models defining the /api/notes contract.

Projection rules:
    - NoteResponse (single note, create, update) carries `user_id`
    - NoteListItem (GET /api/notes) never carries `user_id`; the owner is
      embedded as {name} only
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class OwnerProjection(BaseModel):
    """Reduced view of the owning user embedded in listings."""
    name: str

    model_config = {"from_attributes": True}


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    content: str = Field(min_length=1, description="Note text")
    important: bool = Field(default=False)


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes/{id}."""
    important: bool


class NoteResponse(BaseModel):
    id: int
    content: str
    important: bool
    date: datetime
    user_id: Optional[int] = None

    model_config = {"from_attributes": True}


class NoteListItem(BaseModel):
    id: int
    content: str
    important: bool
    date: datetime
    user: Optional[OwnerProjection] = None

    model_config = {"from_attributes": True}
