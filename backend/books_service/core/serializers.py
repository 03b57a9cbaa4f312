"""Plain-dict views of database rows.

Identifier fields are always wrapped in ``Int64`` so the response class can
encode them; rows fresh from an INSERT may carry a plain ``int`` primary key.
"""

from typing import Any, Optional

from books_service.core.identifiers import Int64
from books_service.models.database import (
    Book,
    BookComment,
    Chapter,
    ChapterComment,
    Genre,
    Paragraph,
    User,
)


def ident(value: Optional[int]) -> Optional[Int64]:
    if value is None:
        return None
    return Int64(value)


def user_summary(user: User) -> dict[str, Any]:
    return {
        "username": user.username,
        "profilePicture": user.profile_picture,
    }


def genre_out(genre: Genre) -> dict[str, Any]:
    return {"id": ident(genre.id), "name": genre.name}


def book_genres(book: Book) -> list[dict[str, Any]]:
    """Genres of a book with ``genres.genre`` loaded, ordered by genre id."""
    genres = sorted((bg.genre for bg in book.genres), key=lambda g: g.id)
    return [genre_out(genre) for genre in genres]


def book_out(book: Book) -> dict[str, Any]:
    """Full book view. Requires ``author`` and ``genres.genre`` loaded."""
    return {
        "id": ident(book.id),
        "title": book.title,
        "description": book.description,
        "coverImage": book.cover_image,
        "published": book.published,
        "createdAt": book.created_at,
        "authorId": ident(book.author_id),
        "author": user_summary(book.author),
        "genres": book_genres(book),
    }


def chapter_out(chapter: Chapter) -> dict[str, Any]:
    """Chapter header view. Requires ``book.author`` loaded."""
    return {
        "id": ident(chapter.id),
        "title": chapter.title,
        "published": chapter.published,
        "createdAt": chapter.created_at,
        "bookId": ident(chapter.book_id),
        "book": {
            "title": chapter.book.title,
            "author": {"username": chapter.book.author.username},
        },
    }


def paragraph_out(paragraph: Paragraph) -> dict[str, Any]:
    return {
        "id": ident(paragraph.id),
        "paragraphNumber": paragraph.paragraph_number,
        "content": paragraph.content,
    }


def comment_out(comment: BookComment | ChapterComment) -> dict[str, Any]:
    """Comment view. Requires ``user`` loaded."""
    return {
        "id": ident(comment.id),
        "comment": comment.comment,
        "createdAt": comment.created_at,
        "userId": ident(comment.user_id),
        "user": user_summary(comment.user),
    }
