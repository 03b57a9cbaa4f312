"""Genre request schemas."""

from pydantic import Field

from books_service.models.schemas.common import CamelModel, GenreName


class CreateGenresRequest(CamelModel):
    """Batch of genre names to create or reuse."""
    name: list[GenreName] = Field(min_length=1)
