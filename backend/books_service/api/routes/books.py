"""Book API routes."""

from typing import Annotated, Optional

from fastapi import APIRouter, BackgroundTasks, Query
from pydantic import ValidationError as PydanticValidationError

from books_service.api.dependencies import BookId, DbSession, UserId, ViewerId
from books_service.api.responses import ok
from books_service.core.books import composer, service as books
from books_service.core.errors import ValidationError
from books_service.core.notifications import notify_author_followers
from books_service.models.schemas import (
    CreateBookRequest,
    PublishRequest,
    SearchBooksQuery,
    UpdateBookRequest,
    format_errors,
)

router = APIRouter()


@router.get("")
async def list_books(db: DbSession):
    """List published books in simplified form."""
    listing = await books.list_published_books(db)
    return ok("Books retrieved successfully", listing)


@router.get("/search")
async def search_books(
    db: DbSession,
    q: Annotated[str, Query()] = "",
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
):
    """Search published books by title or description."""
    try:
        params = SearchBooksQuery(q=q, user_id=user_id or None)
    except PydanticValidationError as e:
        raise ValidationError("Invalid search parameters", format_errors(e.errors())) from e

    results = await books.search_books(db, params.q, viewer_id=params.user_id)
    return ok("Search completed successfully", results)


@router.get("/user/{user_id}/favorites")
async def get_favorite_books(user_id: UserId, db: DbSession):
    """Books the user marked as favourite."""
    return ok("Favorite books retrieved successfully", await books.list_favorite_books(db, user_id))


@router.get("/user/{user_id}/writing")
async def get_writing_books(user_id: UserId, db: DbSession):
    """Books written by the user, drafts included."""
    return ok("Writing books retrieved successfully", await books.list_writing_books(db, user_id))


@router.post("", status_code=201)
async def create_book(
    request: CreateBookRequest,
    background_tasks: BackgroundTasks,
    db: DbSession,
):
    """Create a book with its genres."""
    book = await books.create_book(
        db,
        title=request.title,
        description=request.description,
        author_id=request.author_id,
        genre_ids=request.genre_ids,
        new_genres=request.new_genres,
        cover_image=request.cover_image,
    )
    background_tasks.add_task(notify_author_followers, request.author_id, request.title)
    return ok("Book created successfully", book)


@router.get("/{book_id}")
async def get_book(book_id: BookId, viewer_id: ViewerId, db: DbSession):
    """Get a book with its chapters and comments as seen by ``userId``."""
    view = await composer.get_book_with_chapters(db, book_id, viewer_id)
    return ok("Book retrieved successfully", view)


@router.patch("/{book_id}")
async def update_book(book_id: BookId, request: UpdateBookRequest, db: DbSession):
    """Partially update a book."""
    changes = request.model_dump(exclude_unset=True)
    book = await books.update_book(db, book_id, **changes)
    return ok("Book updated successfully", book)


@router.patch("/{book_id}/publish")
async def publish_book(book_id: BookId, request: PublishRequest, db: DbSession):
    """Publish or unpublish a book."""
    book = await books.set_book_published(db, book_id, request.published)
    state = "published" if request.published else "unpublished"
    return ok(f"Book {state} successfully", book)


@router.delete("/{book_id}")
async def delete_book(book_id: BookId, db: DbSession):
    """Delete a book and everything it owns."""
    await books.delete_book(db, book_id)
    return ok("Book deleted successfully")
