"""
Notes Backend — User Request/Response Schemas
==============================================

What:  Pydantic models for the /api/users endpoints.
How:   FastAPI validates request bodies against these; failures are
       translated to 400 by the request-validation handler. The email-syntax
       username policy depends on the app's settings and is applied by
       UserService.create_user, not here.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Body of POST /api/users."""
    username: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=72,
        description="Optional per-user password; omitted users log in with the shared password",
    )


class UserRename(BaseModel):
    """Body of PUT /api/users/{username}."""
    name: str = Field(min_length=1, max_length=255)


class UserNote(BaseModel):
    """A note embedded in a user listing. The owner foreign key is omitted."""
    id: int
    content: str
    important: bool
    date: datetime

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: int
    username: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserWithNotes(UserResponse):
    """Returned by GET /api/users and GET /api/users/{id}."""
    notes: List[UserNote] = Field(default_factory=list)
