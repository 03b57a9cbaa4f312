"""Chapter API routes."""

from fastapi import APIRouter, BackgroundTasks

from books_service.api.dependencies import BookId, ChapterId, DbSession
from books_service.api.responses import ok
from books_service.core.chapters import composer, service as chapters
from books_service.core.notifications import notify_book_followers
from books_service.models.schemas import (
    AddChapterContentRequest,
    CreateChapterRequest,
    PublishRequest,
)

router = APIRouter()


@router.post("/{book_id}/chapters", status_code=201)
async def create_chapter(book_id: BookId, request: CreateChapterRequest, db: DbSession):
    """Create an empty chapter in a book."""
    chapter = await chapters.create_chapter(db, book_id, request.title)
    return ok("Chapter created successfully", chapter)


@router.get("/chapters/{chapter_id}")
async def get_chapter_content(chapter_id: ChapterId, db: DbSession):
    """Get a chapter with its paragraphs and comments."""
    view = await composer.get_chapter_content(db, chapter_id)
    return ok("Chapter retrieved successfully", view)


@router.post("/chapters/{chapter_id}/content", status_code=201)
async def add_chapter_content(
    chapter_id: ChapterId, request: AddChapterContentRequest, db: DbSession
):
    """Append paragraphs to the end of a chapter."""
    paragraphs = await chapters.append_paragraphs(db, chapter_id, request.paragraphs)
    return ok("Content added successfully", paragraphs)


@router.patch("/chapters/{chapter_id}/publish")
async def publish_chapter(
    chapter_id: ChapterId,
    request: PublishRequest,
    background_tasks: BackgroundTasks,
    db: DbSession,
):
    """Publish or unpublish a chapter. Followers of the book hear about publishes."""
    chapter = await chapters.set_chapter_published(db, chapter_id, request.published)
    if request.published:
        background_tasks.add_task(
            notify_book_followers, chapter["bookId"], chapter["book"]["title"]
        )
    state = "published" if request.published else "unpublished"
    return ok(f"Chapter {state} successfully", chapter)


@router.delete("/chapters/{chapter_id}")
async def delete_chapter(chapter_id: ChapterId, db: DbSession):
    """Delete a chapter with its paragraphs and comments."""
    await chapters.delete_chapter(db, chapter_id)
    return ok("Chapter deleted successfully")
