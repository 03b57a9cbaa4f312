"""Paragraph database model."""

from typing import TYPE_CHECKING

from sqlalchemy import Text, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id

if TYPE_CHECKING:
    from books_service.models.database.chapter import Chapter


class Paragraph(Base):
    """Immutable paragraph of chapter content."""

    __tablename__ = "chapter_paragraphs"
    __table_args__ = (
        UniqueConstraint(
            "chapter_id", "paragraph_number", name="uq_paragraph_chapter_number"
        ),
    )

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    chapter_id: Mapped[int] = mapped_column(
        Int64Id, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )

    # 1-based, dense, assigned at append time and never resequenced
    paragraph_number: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="paragraphs")
