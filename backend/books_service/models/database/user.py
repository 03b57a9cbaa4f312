"""User database model.

Users are owned by the accounts service; this service only reads them for
existence checks and display data.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from books_service.models.database.base import Base
from books_service.models.database.types import Int64Id


class User(Base):
    """Reader or author referenced by books, comments and likes."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Int64Id, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(1000))

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
