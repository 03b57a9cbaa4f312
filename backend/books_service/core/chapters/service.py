"""Chapter mutations: create, append content, publish, delete."""

import logging
from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from books_service.core.errors import NotFound, ReferenceNotFound
from books_service.core.serializers import chapter_out, paragraph_out
from books_service.core.transactions import atomic
from books_service.models.database import Book, Chapter, Paragraph

logger = logging.getLogger(__name__)

CHAPTER_HEADER_OPTIONS = (
    selectinload(Chapter.book).selectinload(Book.author),
)


async def load_chapter(db: AsyncSession, chapter_id: int) -> Optional[Chapter]:
    """Load a chapter with its book and the book's author."""
    result = await db.execute(
        select(Chapter)
        .where(Chapter.id == chapter_id)
        .options(*CHAPTER_HEADER_OPTIONS)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_chapter(db: AsyncSession, book_id: int, title: str) -> dict[str, Any]:
    """Create an empty, unpublished chapter.

    Raises:
        ReferenceNotFound: if the book does not exist
    """
    async with atomic(db, "create chapter"):
        result = await db.execute(select(Book.id).where(Book.id == book_id))
        if result.scalar_one_or_none() is None:
            raise ReferenceNotFound(f"Book {book_id} does not exist")

        chapter = Chapter(book_id=book_id, title=title, published=False)
        db.add(chapter)
        await db.flush()
        chapter_id = chapter.id

    logger.info("Created chapter %s in book %s", chapter_id, book_id)
    return chapter_out(await load_chapter(db, chapter_id))


async def append_paragraphs(
    db: AsyncSession, chapter_id: int, paragraphs: list[str]
) -> list[dict[str, Any]]:
    """Append paragraphs after the chapter's last one.

    Numbering continues at ``max(paragraph_number) + 1`` (1 for an empty
    chapter). The chapter row is write-locked for the read-then-insert so
    concurrent appends to one chapter are serialized; the unique
    ``(chapter_id, paragraph_number)`` constraint backs this up.

    Raises:
        ReferenceNotFound: if the chapter does not exist
    """
    async with atomic(db, "append chapter content"):
        # A no-op write takes the chapter's write lock on every dialect,
        # SQLite included, before the max is read
        result = await db.execute(
            update(Chapter)
            .where(Chapter.id == chapter_id)
            .values(id=Chapter.id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ReferenceNotFound(f"Chapter {chapter_id} does not exist")

        result = await db.execute(
            select(func.max(Paragraph.paragraph_number)).where(
                Paragraph.chapter_id == chapter_id
            )
        )
        start_number = (result.scalar() or 0) + 1

        created = [
            Paragraph(
                chapter_id=chapter_id,
                paragraph_number=start_number + offset,
                content=content,
            )
            for offset, content in enumerate(paragraphs)
        ]
        db.add_all(created)
        await db.flush()

    logger.info(
        "Appended %d paragraph(s) to chapter %s starting at %d",
        len(created), chapter_id, start_number,
    )
    return [paragraph_out(paragraph) for paragraph in created]


async def set_chapter_published(
    db: AsyncSession, chapter_id: int, published: bool
) -> dict[str, Any]:
    """Set the chapter's published flag, independent of its book. Idempotent.

    Raises:
        NotFound: if the chapter does not exist
    """
    async with atomic(db, "publish chapter"):
        chapter = await load_chapter(db, chapter_id)
        if chapter is None:
            raise NotFound(f"Chapter {chapter_id} not found")
        chapter.published = published

    logger.info("Chapter %s published=%s", chapter_id, published)
    return chapter_out(chapter)


async def delete_chapter(db: AsyncSession, chapter_id: int) -> None:
    """Delete a chapter; paragraphs, comments and likes cascade.

    Raises:
        NotFound: if the chapter does not exist
    """
    async with atomic(db, "delete chapter"):
        result = await db.execute(delete(Chapter).where(Chapter.id == chapter_id))
        if result.rowcount == 0:
            raise NotFound(f"Chapter {chapter_id} not found")

    logger.info("Deleted chapter %s", chapter_id)
