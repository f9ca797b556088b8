"""
Notes Backend — Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD and by the query builder for filtering.

Columns:
    - content:   required text, searched by `?search=`
    - important: boolean flag, filtered by `?important=true|false`
    - date:      set once at creation (UTC)
    - user_id:   owner; NULL once the owning user is deleted
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteapp.database import Base
from noteapp.models.user import User, utcnow


class Note(Base):
    """
    A note owned by a user.

    Lifecycle:
        1. Created by an authenticated POST /api/notes (owner and date stamped)
        2. `important` toggled by PUT /api/notes/{id}
        3. Deleted by DELETE /api/notes/{id}, only by its owner
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    important: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    user: Mapped[Optional[User]] = relationship(back_populates="notes")

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, important={self.important}, user_id={self.user_id})>"
