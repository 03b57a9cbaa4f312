from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from books_service.models.database import Book, BookLike, Chapter, ChapterLike, Genre, User
from books_service.models.database.base import build_engine, init_db


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{(tmp_path / 'books_test.db').as_posix()}"


async def build_test_db(database_url: str):
    engine = build_engine(database_url)
    await init_db(engine)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def seed_user(session: AsyncSession, username: str) -> int:
    user = User(username=username, profile_picture=f"https://img.test/{username}.png")
    session.add(user)
    await session.commit()
    return user.id


async def seed_genre(session: AsyncSession, name: str) -> int:
    genre = Genre(name=name)
    session.add(genre)
    await session.commit()
    return genre.id


async def seed_book(
    session: AsyncSession, author_id: int, title: str = "Seeded book", published: bool = True
) -> int:
    book = Book(
        author_id=author_id,
        title=title,
        description="A seeded description for tests.",
        published=published,
    )
    session.add(book)
    await session.commit()
    return book.id


async def seed_chapter(
    session: AsyncSession, book_id: int, title: str = "Seeded chapter", published: bool = True
) -> int:
    chapter = Chapter(book_id=book_id, title=title, published=published)
    session.add(chapter)
    await session.commit()
    return chapter.id


async def like_book(session: AsyncSession, book_id: int, user_id: int) -> None:
    session.add(BookLike(book_id=book_id, user_id=user_id))
    await session.commit()


async def like_chapter(session: AsyncSession, chapter_id: int, user_id: int) -> None:
    session.add(ChapterLike(chapter_id=chapter_id, user_id=user_id))
    await session.commit()
