"""Comment API routes.

Chapter routes are declared first so ``/chapters/{id}/comments`` is not
captured by ``/{book_id}/comments``.
"""

from fastapi import APIRouter

from books_service.api.dependencies import BookId, ChapterId, CommentId, DbSession
from books_service.api.responses import ok
from books_service.core.comments import service as comments
from books_service.models.schemas import CreateCommentRequest

router = APIRouter()


@router.post("/chapters/{chapter_id}/comments", status_code=201)
async def create_chapter_comment(
    chapter_id: ChapterId, request: CreateCommentRequest, db: DbSession
):
    comment = await comments.create_chapter_comment(
        db, chapter_id, request.user_id, request.comment
    )
    return ok("Comment created successfully", comment)


@router.post("/{book_id}/comments", status_code=201)
async def create_book_comment(book_id: BookId, request: CreateCommentRequest, db: DbSession):
    comment = await comments.create_book_comment(db, book_id, request.user_id, request.comment)
    return ok("Comment created successfully", comment)


@router.delete("/comments/{comment_id}")
async def delete_book_comment(comment_id: CommentId, db: DbSession):
    await comments.delete_book_comment(db, comment_id)
    return ok("Comment deleted successfully")


@router.delete("/chapter-comments/{comment_id}")
async def delete_chapter_comment(comment_id: CommentId, db: DbSession):
    await comments.delete_chapter_comment(db, comment_id)
    return ok("Comment deleted successfully")
