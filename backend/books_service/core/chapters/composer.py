"""Chapter-with-content read view."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from books_service.core.chapters.service import load_chapter
from books_service.core.errors import NotFound
from books_service.core.serializers import chapter_out, comment_out, paragraph_out
from books_service.models.database import ChapterComment, Paragraph


async def get_chapter_content(db: AsyncSession, chapter_id: int) -> dict[str, Any]:
    """Compose a chapter with its paragraphs (in order) and comments (newest first).

    No visibility filtering happens here; the caller decides whether an
    unpublished chapter may be shown.

    Raises:
        NotFound: if the chapter does not exist
    """
    chapter = await load_chapter(db, chapter_id)
    if chapter is None:
        raise NotFound(f"Chapter {chapter_id} not found")

    result = await db.execute(
        select(Paragraph)
        .where(Paragraph.chapter_id == chapter_id)
        .order_by(Paragraph.paragraph_number.asc())
    )
    paragraphs = result.scalars().all()

    result = await db.execute(
        select(ChapterComment)
        .where(ChapterComment.chapter_id == chapter_id)
        .options(selectinload(ChapterComment.user))
        .order_by(ChapterComment.created_at.desc(), ChapterComment.id.desc())
    )
    comments = result.scalars().all()

    view = chapter_out(chapter)
    view["paragraphs"] = [paragraph_out(paragraph) for paragraph in paragraphs]
    view["comments"] = [comment_out(comment) for comment in comments]
    return view
