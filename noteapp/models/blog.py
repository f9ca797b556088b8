"""
Notes Backend — Blog SQLAlchemy Model
======================================

What:  ORM model representing the `blogs` table (the blog variant of a note).
Who:   Used by BlogService for CRUD and by the query builder for searching,
       ordering by likes and the per-author aggregation.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteapp.database import Base
from noteapp.models.user import User, utcnow


class Blog(Base):
    """A blog entry: title, url, author and a like counter."""

    __tablename__ = "blogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Grouping key for GET /api/authors; NULL authors form their own group
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

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

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    user: Mapped[Optional[User]] = relationship(back_populates="blogs")

    __table_args__ = (
        Index("idx_blogs_author", "author"),
        Index("idx_blogs_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', likes={self.likes})>"
