"""Book database model."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.user import User
    from books_service.models.database.chapter import Chapter
    from books_service.models.database.comment import BookComment
    from books_service.models.database.genre import BookGenre
    from books_service.models.database.like import BookLike


class Book(Base):
    """A book written by exactly one author."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    cover_image: Mapped[Optional[str]] = mapped_column(Text)

    # Only flipped by the publish operation
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )

    # Relationships (owned rows are removed by ON DELETE CASCADE)
    author: Mapped["User"] = relationship("User")
    genres: Mapped[list["BookGenre"]] = relationship(
        "BookGenre", back_populates="book", passive_deletes=True
    )
    chapters: Mapped[list["Chapter"]] = relationship(
        "Chapter", back_populates="book", passive_deletes=True
    )
    comments: Mapped[list["BookComment"]] = relationship(
        "BookComment", back_populates="book", passive_deletes=True
    )
    likes: Mapped[list["BookLike"]] = relationship(
        "BookLike", back_populates="book", passive_deletes=True
    )
