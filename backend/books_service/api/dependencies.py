"""Shared API dependencies: request sessions and identifier path parameters."""

from typing import Annotated, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from books_service.core.identifiers import Int64, decode
from books_service.models.database import get_db

DbSession = Annotated[AsyncSession, Depends(get_db)]


def book_id_param(book_id: str) -> Int64:
    return decode(book_id)


def chapter_id_param(chapter_id: str) -> Int64:
    return decode(chapter_id)


def comment_id_param(comment_id: str) -> Int64:
    return decode(comment_id)


def user_id_param(user_id: str) -> Int64:
    return decode(user_id)


def viewer_id_param(
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
) -> Optional[Int64]:
    """Optional ``?userId=`` of the requesting user."""
    if user_id is None or not user_id.strip():
        return None
    return decode(user_id)


BookId = Annotated[Int64, Depends(book_id_param)]
ChapterId = Annotated[Int64, Depends(chapter_id_param)]
CommentId = Annotated[Int64, Depends(comment_id_param)]
UserId = Annotated[Int64, Depends(user_id_param)]
ViewerId = Annotated[Optional[Int64], Depends(viewer_id_param)]
