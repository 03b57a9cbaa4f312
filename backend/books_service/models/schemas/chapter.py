"""Chapter request schemas."""

from pydantic import Field

from books_service.models.schemas.common import CamelModel, ParagraphText, Title


class CreateChapterRequest(CamelModel):
    """Request to create an empty chapter."""
    title: Title


class AddChapterContentRequest(CamelModel):
    """Paragraph batch to append to a chapter, in reading order."""
    paragraphs: list[ParagraphText] = Field(min_length=1)
