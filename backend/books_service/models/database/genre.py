"""Genre and book-genre association models."""

from typing import TYPE_CHECKING

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.book import Book


class Genre(Base):
    """Genre shared across books. Names are stored lowercase and trimmed."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)


class BookGenre(Base):
    """Book <-> genre association."""

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genres")
    genre: Mapped["Genre"] = relationship("Genre")
