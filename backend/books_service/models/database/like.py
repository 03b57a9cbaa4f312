"""Like markers.

``BookLike`` marks a book as a user's favourite; ``ChapterLike`` marks a
single chapter as liked. They are separate relations.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.book import Book
    from books_service.models.database.chapter import Chapter


class BookLike(Base):
    """User favourite on a book."""

    __tablename__ = "book_likes"

    book_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    book: Mapped["Book"] = relationship("Book", back_populates="likes")


class ChapterLike(Base):
    """User like on a chapter."""

    __tablename__ = "chapter_likes"

    chapter_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("chapters.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="likes")
