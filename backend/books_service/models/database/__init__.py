"""Database models package."""

from books_service.models.database.base import Base, get_db, init_db
from books_service.models.database.user import User
from books_service.models.database.book import Book
from books_service.models.database.chapter import Chapter
from books_service.models.database.paragraph import Paragraph
from books_service.models.database.comment import BookComment, ChapterComment
from books_service.models.database.genre import Genre, BookGenre
from books_service.models.database.like import BookLike, ChapterLike

__all__ = [
    # Base
    "Base",
    "get_db",
    "init_db",
    # Models
    "User",
    "Book",
    "Chapter",
    "Paragraph",
    "BookComment",
    "ChapterComment",
    "Genre",
    "BookGenre",
    "BookLike",
    "ChapterLike",
]
