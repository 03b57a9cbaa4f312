"""Book-with-chapters read view, scoped by viewer."""

from typing import Any, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from books_service.core.books.service import load_book
from books_service.core.errors import NotFound
from books_service.core.serializers import book_out, comment_out, ident
from books_service.models.database import BookComment, Chapter, ChapterLike


async def chapter_liked_by(db: AsyncSession, chapter_id: int, user_id: int) -> bool:
    """Whether ``user_id`` liked the chapter (single existence check)."""
    result = await db.execute(
        select(
            exists().where(
                ChapterLike.chapter_id == chapter_id,
                ChapterLike.user_id == user_id,
            )
        )
    )
    return bool(result.scalar())


async def get_book_with_chapters(
    db: AsyncSession, book_id: int, viewer_id: Optional[int] = None
) -> dict[str, Any]:
    """Compose a book with its chapters, likes, genres and comments.

    The author sees every chapter; any other viewer (or none) only
    published ones, and ``isLiked`` is always false without a viewer.
    Chapters are oldest first, comments newest first.

    Raises:
        NotFound: if the book does not exist
    """
    book = await load_book(db, book_id)
    if book is None:
        raise NotFound(f"Book {book_id} not found")

    is_author = viewer_id is not None and int(book.author_id) == int(viewer_id)

    chapter_query = select(Chapter).where(Chapter.book_id == book_id)
    if not is_author:
        chapter_query = chapter_query.where(Chapter.published.is_(True))
    result = await db.execute(
        chapter_query.order_by(Chapter.created_at.asc(), Chapter.id.asc())
    )
    chapters = result.scalars().all()

    chapter_views = []
    for chapter in chapters:
        chapter_views.append({
            "id": ident(chapter.id),
            "title": chapter.title,
            "published": chapter.published,
            "createdAt": chapter.created_at,
            "isLiked": (
                viewer_id is not None
                and await chapter_liked_by(db, chapter.id, viewer_id)
            ),
        })

    result = await db.execute(
        select(BookComment)
        .where(BookComment.book_id == book_id)
        .options(selectinload(BookComment.user))
        .order_by(BookComment.created_at.desc(), BookComment.id.desc())
    )
    comments = result.scalars().all()

    view = book_out(book)
    view["chapters"] = chapter_views
    view["comments"] = [comment_out(comment) for comment in comments]
    return view
