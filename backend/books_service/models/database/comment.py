"""Book and chapter comment models.

The two variants share a shape but live in separate tables.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.book import Book
    from books_service.models.database.chapter import Chapter
    from books_service.models.database.user import User


class BookComment(Base):
    """Comment on a book."""

    __tablename__ = "book_comments"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    book: Mapped["Book"] = relationship("Book", back_populates="comments")
    user: Mapped["User"] = relationship("User")


class ChapterComment(Base):
    """Comment on a chapter."""

    __tablename__ = "chapter_comments"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    chapter_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="comments")
    user: Mapped["User"] = relationship("User")
