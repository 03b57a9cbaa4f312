"""Pydantic schemas for API requests."""

from books_service.models.schemas.book import CreateBookRequest, UpdateBookRequest, PublishRequest, SearchBooksQuery
from books_service.models.schemas.chapter import CreateChapterRequest, AddChapterContentRequest
from books_service.models.schemas.comment import CreateCommentRequest
from books_service.models.schemas.genre import CreateGenresRequest
from books_service.models.schemas.common import format_errors

__all__ = [
    "CreateBookRequest",
    "UpdateBookRequest",
    "PublishRequest",
    "SearchBooksQuery",
    "CreateChapterRequest",
    "AddChapterContentRequest",
    "CreateCommentRequest",
    "CreateGenresRequest",
    "format_errors",
]
