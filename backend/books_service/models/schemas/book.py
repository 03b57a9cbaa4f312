"""Book request schemas."""

from typing import Annotated, Optional

from pydantic import StrictBool, StringConstraints

from books_service.models.schemas.common import (
    CamelModel,
    Description,
    GenreName,
    Title,
    Uri,
    WireId,
)


class CreateBookRequest(CamelModel):
    """Request to create a book."""
    title: Title
    description: Description
    author_id: WireId
    genre_ids: Optional[list[WireId]] = None
    new_genres: Optional[list[GenreName]] = None
    cover_image: Optional[Uri] = None


class UpdateBookRequest(CamelModel):
    """Partial book update. Omitted fields are left untouched."""
    title: Optional[Title] = None
    description: Optional[Description] = None
    genre_ids: Optional[list[WireId]] = None
    new_genres: Optional[list[GenreName]] = None
    cover_image: Optional[Uri] = None


class PublishRequest(CamelModel):
    """Request to publish or unpublish a book or chapter."""
    published: StrictBool


class SearchBooksQuery(CamelModel):
    """Free-text search parameters."""
    q: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    user_id: Optional[WireId] = None
