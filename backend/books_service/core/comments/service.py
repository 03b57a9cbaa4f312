"""Book and chapter comments: append-only, individually deletable."""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from books_service.core.errors import NotFound, ReferenceNotFound
from books_service.core.serializers import comment_out
from books_service.core.transactions import atomic
from books_service.core.users import user_exists
from books_service.models.database import Book, BookComment, Chapter, ChapterComment

logger = logging.getLogger(__name__)


async def _load_comment(db: AsyncSession, model, comment_id: int):
    result = await db.execute(
        select(model).where(model.id == comment_id).options(selectinload(model.user))
    )
    return result.scalar_one()


async def create_book_comment(
    db: AsyncSession, book_id: int, user_id: int, comment: str
) -> dict[str, Any]:
    """Comment on a book.

    Raises:
        ReferenceNotFound: if the book or the user does not exist
    """
    async with atomic(db, "create book comment"):
        result = await db.execute(select(Book.id).where(Book.id == book_id))
        if result.scalar_one_or_none() is None:
            raise ReferenceNotFound(f"Book {book_id} does not exist")
        if not await user_exists(db, user_id):
            raise ReferenceNotFound(f"User {user_id} does not exist")

        row = BookComment(book_id=book_id, user_id=user_id, comment=comment)
        db.add(row)
        await db.flush()
        comment_id = row.id

    logger.info("User %s commented on book %s", user_id, book_id)
    return comment_out(await _load_comment(db, BookComment, comment_id))


async def create_chapter_comment(
    db: AsyncSession, chapter_id: int, user_id: int, comment: str
) -> dict[str, Any]:
    """Comment on a chapter.

    Raises:
        ReferenceNotFound: if the chapter or the user does not exist
    """
    async with atomic(db, "create chapter comment"):
        result = await db.execute(select(Chapter.id).where(Chapter.id == chapter_id))
        if result.scalar_one_or_none() is None:
            raise ReferenceNotFound(f"Chapter {chapter_id} does not exist")
        if not await user_exists(db, user_id):
            raise ReferenceNotFound(f"User {user_id} does not exist")

        row = ChapterComment(chapter_id=chapter_id, user_id=user_id, comment=comment)
        db.add(row)
        await db.flush()
        comment_id = row.id

    logger.info("User %s commented on chapter %s", user_id, chapter_id)
    return comment_out(await _load_comment(db, ChapterComment, comment_id))


async def _delete_comment(db: AsyncSession, model, comment_id: int, label: str) -> None:
    async with atomic(db, f"delete {label}"):
        result = await db.execute(delete(model).where(model.id == comment_id))
        if result.rowcount == 0:
            raise NotFound(f"Comment {comment_id} not found")
    logger.info("Deleted %s %s", label, comment_id)


async def delete_book_comment(db: AsyncSession, comment_id: int) -> None:
    """Raises ``NotFound`` if the comment does not exist."""
    await _delete_comment(db, BookComment, comment_id, "book comment")


async def delete_chapter_comment(db: AsyncSession, comment_id: int) -> None:
    """Raises ``NotFound`` if the comment does not exist."""
    await _delete_comment(db, ChapterComment, comment_id, "chapter comment")
