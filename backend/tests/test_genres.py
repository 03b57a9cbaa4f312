from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from sqlalchemy import func, select

from books_service.core.errors import InvalidReference
from books_service.core.genres import service as genres
from books_service.models.database import BookGenre, Genre

from conftest import build_test_db, seed_book, seed_genre, seed_user


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [(3, 6, 50.0), (2, 6, 33.33), (1, 6, 16.67), (2, 3, 66.67), (1, 8, 12.5), (0, 0, 0.0)],
)
def test_usage_percentage_rounds_half_up(count, total, expected):
    assert genres.usage_percentage(count, total) == expected


def test_create_genres_normalizes_and_reuses(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            first = await genres.create_genres(session, ["Fantasy", " fantasy ", "Horror"])
            second = await genres.create_genres(session, ["HORROR", "Mystery"])
            count = (await session.execute(select(func.count()).select_from(Genre))).scalar()
        await engine.dispose()
        return first, second, count

    first, second, count = asyncio.run(scenario())

    assert [genre["name"] for genre in first] == ["fantasy", "horror"]
    assert [genre["name"] for genre in second] == ["horror", "mystery"]
    assert second[0]["id"] == first[1]["id"]
    assert count == 3


def test_ensure_genres_exist_reports_missing_ids(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            genre_id = await seed_genre(session, "drama")
            found = await genres.ensure_genres_exist(session, [genre_id, genre_id])
            with pytest.raises(InvalidReference) as exc_info:
                await genres.ensure_genres_exist(session, [genre_id, 404, 405])
        await engine.dispose()
        return genre_id, found, exc_info.value

    genre_id, found, error = asyncio.run(scenario())

    assert found == [genre_id]
    assert error.missing_ids == [404, 405]


def test_genres_by_usage_counts_and_percentages(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            book_ids = [await seed_book(session, author_id, f"Book {n}") for n in range(3)]
            romance = await seed_genre(session, "romance")
            crime = await seed_genre(session, "crime")
            poetry = await seed_genre(session, "poetry")
            await seed_genre(session, "unused")

            links = [(romance, book_ids), (crime, book_ids[:2]), (poetry, book_ids[:1])]
            for genre_id, targets in links:
                session.add_all(BookGenre(book_id=book_id, genre_id=genre_id) for book_id in targets)
            await session.commit()

            usage = await genres.get_genres_by_usage(session)
        await engine.dispose()
        return usage

    usage = asyncio.run(scenario())

    assert [(g["name"], g["usage_count"], g["percentage"]) for g in usage] == [
        ("romance", 3, 50.0),
        ("crime", 2, 33.33),
        ("poetry", 1, 16.67),
        ("unused", 0, 0.0),
    ]


def test_genres_by_usage_breaks_ties_by_name(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            for name in ("zombie", "adventure", "mystery"):
                await seed_genre(session, name)
            usage = await genres.get_genres_by_usage(session)
        await engine.dispose()
        return usage

    usage = asyncio.run(scenario())

    assert [g["name"] for g in usage] == ["adventure", "mystery", "zombie"]
    assert all(g["percentage"] == 0.0 for g in usage)


def test_genres_by_usage_empty_store(tmp_path: Path):
    async def scenario():
        engine, session_maker = await build_test_db(
            f"sqlite+aiosqlite:///{(tmp_path / 'empty.db').as_posix()}"
        )
        async with session_maker() as session:
            usage = await genres.get_genres_by_usage(session)
        await engine.dispose()
        return usage

    assert asyncio.run(scenario()) == []
