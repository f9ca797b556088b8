"""
Notes Backend — User SQLAlchemy Model
======================================

What:  ORM model representing the `users` table.
How:   Inherits from the shared DeclarativeBase; `Database.sync_schema()` and
       Alembic both read it.
Who:   Used by UserService for registration, rename and deletion, and by the
       auth dependencies to resolve a token to a stored user.

Ownership:
    A user owns zero-or-many notes and blogs through their `user_id` foreign
    keys. Deleting a user never deletes those rows; their `user_id` is set to
    NULL (`ON DELETE SET NULL` on the column, and an explicit UPDATE in
    UserService.delete_user for stores that don't enforce foreign keys).
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteapp.database import Base

if TYPE_CHECKING:
    from noteapp.models.blog import Blog
    from noteapp.models.note import Note


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered user.

    Lifecycle:
        1. Created by POST /api/users
        2. Renamed by PUT /api/users/{username} (keyed by username, not id)
        3. Deleted by DELETE /api/users/{id}, only by the user themself
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Unique at write time; a duplicate surfaces as IntegrityError on flush,
    # which UserService turns into a ValidationError
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # NULL means the user logs in with the shared password
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    # passive_deletes: leave the foreign keys to the database on delete
    notes: Mapped[List["Note"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
    blogs: Mapped[List["Blog"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"


# Register the related mappers whenever any model module is imported
import noteapp.models.note  # noqa: E402,F401
import noteapp.models.blog  # noqa: E402,F401
