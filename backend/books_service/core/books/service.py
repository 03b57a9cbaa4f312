"""Book mutations and book listings."""

import logging
from typing import Any, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from books_service.core.errors import NotFound, ReferenceNotFound
from books_service.core.genres.service import create_or_reuse_genres, ensure_genres_exist
from books_service.core.serializers import book_genres, book_out, ident
from books_service.core.transactions import atomic
from books_service.core.users import user_exists
from books_service.models.database import Book, BookGenre, BookLike

logger = logging.getLogger(__name__)

NO_GENRE = "none"

BOOK_DETAIL_OPTIONS = (
    selectinload(Book.author),
    selectinload(Book.genres).selectinload(BookGenre.genre),
)

_UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "cover_image": "cover_image",
}


async def load_book(db: AsyncSession, book_id: int) -> Optional[Book]:
    """Load a book with author and genres, bypassing stale identity-map state."""
    result = await db.execute(
        select(Book)
        .where(Book.id == book_id)
        .options(*BOOK_DETAIL_OPTIONS)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _resolve_genre_ids(
    db: AsyncSession,
    genre_ids: Optional[list[int]],
    new_genres: Optional[list[str]],
) -> list[int]:
    """Union of created/reused ``new_genres`` and validated ``genre_ids``."""
    resolved: list[int] = []
    if new_genres:
        genres = await create_or_reuse_genres(db, new_genres)
        resolved.extend(int(genre.id) for genre in genres)
    if genre_ids:
        resolved.extend(await ensure_genres_exist(db, genre_ids))
    return list(dict.fromkeys(resolved))


async def _associate_genres(db: AsyncSession, book_id: int, genre_ids: list[int]) -> None:
    """Insert one association row per genre id."""
    if not genre_ids:
        return
    db.add_all(BookGenre(book_id=book_id, genre_id=genre_id) for genre_id in genre_ids)
    await db.flush()


async def _replace_genres(db: AsyncSession, book_id: int, genre_ids: list[int]) -> None:
    """Replace the whole association set of a book."""
    await db.execute(delete(BookGenre).where(BookGenre.book_id == book_id))
    await _associate_genres(db, book_id, genre_ids)


async def create_book(
    db: AsyncSession,
    *,
    title: str,
    description: str,
    author_id: int,
    genre_ids: Optional[list[int]] = None,
    new_genres: Optional[list[str]] = None,
    cover_image: Optional[str] = None,
) -> dict[str, Any]:
    """Create an unpublished book together with its genre associations.

    The author check, genre resolution, book insert and association inserts
    are one transaction: if any step fails, nothing persists.

    Raises:
        ReferenceNotFound: if the author does not exist
        InvalidReference: if any of ``genre_ids`` is unknown
    """
    async with atomic(db, "create book"):
        if not await user_exists(db, author_id):
            raise ReferenceNotFound(f"Author {author_id} does not exist")

        resolved_ids = await _resolve_genre_ids(db, genre_ids, new_genres)

        book = Book(
            title=title,
            description=description,
            author_id=author_id,
            cover_image=cover_image,
            published=False,
        )
        db.add(book)
        await db.flush()

        await _associate_genres(db, book.id, resolved_ids)
        book_id = book.id

    logger.info(
        "Created book %s for author %s with %d genre(s)",
        book_id, author_id, len(resolved_ids),
    )
    return book_out(await load_book(db, book_id))


async def update_book(db: AsyncSession, book_id: int, **changes: Any) -> dict[str, Any]:
    """Apply a partial update.

    Only keys present in ``changes`` are applied; ``None`` values are ignored.
    When the resolved genre set (``new_genres`` plus ``genre_ids``) is
    non-empty it replaces the existing associations in the same transaction;
    an empty genre update leaves them alone.

    Raises:
        NotFound: if the book does not exist
        InvalidReference: if any of ``genre_ids`` is unknown
    """
    async with atomic(db, "update book"):
        result = await db.execute(select(Book).where(Book.id == book_id))
        book = result.scalar_one_or_none()
        if book is None:
            raise NotFound(f"Book {book_id} not found")

        for key, attribute in _UPDATABLE_FIELDS.items():
            value = changes.get(key)
            if value is not None:
                setattr(book, attribute, value)

        resolved_ids = await _resolve_genre_ids(
            db, changes.get("genre_ids"), changes.get("new_genres")
        )
        if resolved_ids:
            await _replace_genres(db, book_id, resolved_ids)

    logger.info("Updated book %s (fields=%s)", book_id, sorted(changes))
    return book_out(await load_book(db, book_id))


async def set_book_published(db: AsyncSession, book_id: int, published: bool) -> dict[str, Any]:
    """Set the published flag. Idempotent.

    Raises:
        NotFound: if the book does not exist
    """
    async with atomic(db, "publish book"):
        book = await load_book(db, book_id)
        if book is None:
            raise NotFound(f"Book {book_id} not found")
        book.published = published

    logger.info("Book %s published=%s", book_id, published)
    return book_out(book)


async def delete_book(db: AsyncSession, book_id: int) -> None:
    """Delete a book; chapters, comments, likes and associations cascade.

    Raises:
        NotFound: if the book does not exist (a repeated delete included)
    """
    async with atomic(db, "delete book"):
        result = await db.execute(delete(Book).where(Book.id == book_id))
        if result.rowcount == 0:
            raise NotFound(f"Book {book_id} not found")

    logger.info("Deleted book %s", book_id)


async def list_published_books(db: AsyncSession) -> list[dict[str, Any]]:
    """Published books, newest first, with only their first genre's name."""
    result = await db.execute(
        select(Book)
        .where(Book.published.is_(True))
        .options(selectinload(Book.genres).selectinload(BookGenre.genre))
        .order_by(Book.created_at.desc(), Book.id.desc())
    )
    books = result.scalars().all()

    listing = []
    for book in books:
        genres = book_genres(book)
        listing.append({
            "id": ident(book.id),
            "title": book.title,
            "coverImage": book.cover_image,
            "genre": genres[0]["name"] if genres else NO_GENRE,
        })
    return listing


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def search_books(
    db: AsyncSession, query: str, viewer_id: Optional[int] = None
) -> list[dict[str, Any]]:
    """Published books whose title or description contains ``query``.

    ``isFav`` reflects the viewer's book-level favourite (``BookLike``); it
    is always false without a viewer.
    """
    pattern = _like_pattern(query.strip())
    result = await db.execute(
        select(Book)
        .where(
            Book.published.is_(True),
            or_(
                Book.title.ilike(pattern, escape="\\"),
                Book.description.ilike(pattern, escape="\\"),
            ),
        )
        .options(selectinload(Book.genres).selectinload(BookGenre.genre))
        .order_by(Book.created_at.desc(), Book.id.desc())
    )
    books = result.scalars().all()

    favorites: set[int] = set()
    if viewer_id is not None and books:
        fav_result = await db.execute(
            select(BookLike.book_id).where(
                BookLike.user_id == viewer_id,
                BookLike.book_id.in_([book.id for book in books]),
            )
        )
        favorites = {int(book_id) for book_id in fav_result.scalars().all()}

    return [
        {
            "id": ident(book.id),
            "title": book.title,
            "description": book.description,
            "coverImage": book.cover_image,
            "genres": book_genres(book),
            "isFav": int(book.id) in favorites,
        }
        for book in books
    ]


async def list_favorite_books(db: AsyncSession, user_id: int) -> list[dict[str, Any]]:
    """Books the user marked as favourite, most recently favourited first."""
    result = await db.execute(
        select(Book)
        .join(BookLike, BookLike.book_id == Book.id)
        .where(BookLike.user_id == user_id)
        .options(*BOOK_DETAIL_OPTIONS)
        .order_by(BookLike.created_at.desc(), Book.id.desc())
    )
    return [book_out(book) for book in result.scalars().all()]


async def list_writing_books(db: AsyncSession, user_id: int) -> list[dict[str, Any]]:
    """Books authored by the user, newest first, published or not."""
    result = await db.execute(
        select(Book)
        .where(Book.author_id == user_id)
        .options(*BOOK_DETAIL_OPTIONS)
        .order_by(Book.created_at.desc(), Book.id.desc())
    )
    return [book_out(book) for book in result.scalars().all()]
