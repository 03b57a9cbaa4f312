"""Chapter database model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.book import Book
    from books_service.models.database.paragraph import Paragraph
    from books_service.models.database.comment import ChapterComment
    from books_service.models.database.like import ChapterLike


class Chapter(Base):
    """Chapter within a book. Created empty; content arrives as paragraphs."""

    __tablename__ = "chapters"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    # Relationships
    book: Mapped["Book"] = relationship("Book", back_populates="chapters")
    paragraphs: Mapped[list["Paragraph"]] = relationship(
        "Paragraph", back_populates="chapter", passive_deletes=True
    )
    comments: Mapped[list["ChapterComment"]] = relationship(
        "ChapterComment", back_populates="chapter", passive_deletes=True
    )
    likes: Mapped[list["ChapterLike"]] = relationship(
        "ChapterLike", back_populates="chapter", passive_deletes=True
    )
