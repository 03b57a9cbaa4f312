from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from books_service.core.books import composer
from books_service.core.books import service as books
from books_service.core.errors import InternalFault, InvalidReference, NotFound, ReferenceNotFound
from books_service.core.identifiers import Int64
from books_service.models.database import Book, BookGenre, Chapter, Genre

from conftest import (
    build_test_db,
    like_book,
    like_chapter,
    seed_book,
    seed_chapter,
    seed_genre,
    seed_user,
)

DESCRIPTION = "A description that is long enough."


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar()


def test_create_book_with_existing_and_new_genres(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            drama = await seed_genre(session, "drama")
            book = await books.create_book(
                session,
                title="First Book",
                description=DESCRIPTION,
                author_id=author_id,
                genre_ids=[drama],
                new_genres=["Space Opera", "drama"],
            )
        await engine.dispose()
        return author_id, drama, book

    author_id, drama, book = asyncio.run(scenario())

    assert isinstance(book["id"], Int64)
    assert book["published"] is False
    assert book["authorId"] == author_id
    assert book["author"]["username"] == "writer"
    assert [genre["name"] for genre in book["genres"]] == ["drama", "space opera"]
    assert book["genres"][0]["id"] == drama


def test_create_book_with_unknown_author_persists_nothing(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            with pytest.raises(ReferenceNotFound):
                await books.create_book(
                    session, title="Orphan", description=DESCRIPTION, author_id=999
                )
            count = await _count(session, Book)
        await engine.dispose()
        return count

    assert asyncio.run(scenario()) == 0


def test_create_book_with_unknown_genre_persists_nothing(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            with pytest.raises(InvalidReference) as exc_info:
                await books.create_book(
                    session,
                    title="Bad genres",
                    description=DESCRIPTION,
                    author_id=author_id,
                    genre_ids=[77],
                    new_genres=["thriller"],
                )
            counts = (await _count(session, Book), await _count(session, Genre))
        await engine.dispose()
        return exc_info.value, counts

    error, counts = asyncio.run(scenario())

    assert error.missing_ids == [77]
    assert counts == (0, 0)


def test_create_book_rolls_back_when_association_insert_fails(database_url: str, monkeypatch):
    async def failing_associate(db, book_id, genre_ids):
        raise SQLAlchemyError("association insert failed")

    monkeypatch.setattr(books, "_associate_genres", failing_associate)

    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            with pytest.raises(InternalFault):
                await books.create_book(
                    session,
                    title="Doomed",
                    description=DESCRIPTION,
                    author_id=author_id,
                    new_genres=["tragedy"],
                )
        async with session_maker() as session:
            counts = (
                await _count(session, Book),
                await _count(session, BookGenre),
                await _count(session, Genre),
            )
        await engine.dispose()
        return counts

    assert asyncio.run(scenario()) == (0, 0, 0)


def test_update_book_genre_semantics(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            first = await seed_genre(session, "first")
            second = await seed_genre(session, "second")
            book = await books.create_book(
                session,
                title="Genre juggling",
                description=DESCRIPTION,
                author_id=author_id,
                genre_ids=[first],
            )
            untouched = await books.update_book(session, book["id"], genre_ids=[], title="Renamed")
            replaced = await books.update_book(session, book["id"], genre_ids=[second])
        await engine.dispose()
        return second, untouched, replaced

    second, untouched, replaced = asyncio.run(scenario())

    assert untouched["title"] == "Renamed"
    assert [genre["name"] for genre in untouched["genres"]] == ["first"]
    assert [genre["id"] for genre in replaced["genres"]] == [second]
    assert replaced["title"] == "Renamed"
    assert replaced["description"] == DESCRIPTION


def test_update_missing_book_is_not_found(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            with pytest.raises(NotFound):
                await books.update_book(session, 12345, title="Nothing here")
        await engine.dispose()

    asyncio.run(scenario())


def test_publish_is_idempotent(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            book_id = await seed_book(session, author_id, published=False)
            first = await books.set_book_published(session, book_id, True)
            second = await books.set_book_published(session, book_id, True)
            with pytest.raises(NotFound):
                await books.set_book_published(session, book_id + 100, True)
        await engine.dispose()
        return first, second

    first, second = asyncio.run(scenario())

    assert first["published"] is True
    assert second["published"] is True


def test_delete_book_cascades_and_is_not_idempotent(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            book_id = await seed_book(session, author_id)
            await seed_chapter(session, book_id)
            await books.delete_book(session, book_id)
            with pytest.raises(NotFound):
                await books.delete_book(session, book_id)
            counts = (await _count(session, Book), await _count(session, Chapter))
        await engine.dispose()
        return counts

    assert asyncio.run(scenario()) == (0, 0)


def test_list_published_books_uses_first_genre_or_none(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            alpha = await seed_genre(session, "alpha")
            beta = await seed_genre(session, "beta")
            tagged = await seed_book(session, author_id, "Tagged")
            await seed_book(session, author_id, "Untagged")
            await seed_book(session, author_id, "Draft", published=False)
            session.add_all([
                BookGenre(book_id=tagged, genre_id=beta),
                BookGenre(book_id=tagged, genre_id=alpha),
            ])
            await session.commit()
            listing = await books.list_published_books(session)
        await engine.dispose()
        return listing

    listing = asyncio.run(scenario())
    by_title = {book["title"]: book for book in listing}

    assert set(by_title) == {"Tagged", "Untagged"}
    assert by_title["Tagged"]["genre"] == "alpha"
    assert by_title["Untagged"]["genre"] == books.NO_GENRE


def test_search_marks_viewer_favourites(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            reader_id = await seed_user(session, "reader")
            liked = await seed_book(session, author_id, "Dragons of Autumn")
            await seed_book(session, author_id, "Dragons of Winter")
            await seed_book(session, author_id, "Dragons in draft", published=False)
            await seed_book(session, author_id, "Cooking 100% better")
            await like_book(session, liked, reader_id)

            as_reader = await books.search_books(session, "dragons", viewer_id=reader_id)
            anonymous = await books.search_books(session, "DRAGONS")
            literal = await books.search_books(session, "0%")
        await engine.dispose()
        return liked, as_reader, anonymous, literal

    liked, as_reader, anonymous, literal = asyncio.run(scenario())

    assert {book["title"] for book in as_reader} == {"Dragons of Autumn", "Dragons of Winter"}
    assert {book["id"]: book["isFav"] for book in as_reader}[liked] is True
    assert sum(book["isFav"] for book in as_reader) == 1
    assert not any(book["isFav"] for book in anonymous)
    assert [book["title"] for book in literal] == ["Cooking 100% better"]


def test_favorite_and_writing_lists(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            reader_id = await seed_user(session, "reader")
            public = await seed_book(session, author_id, "Public")
            await seed_book(session, author_id, "Draft", published=False)
            await like_book(session, public, reader_id)
            favorites = await books.list_favorite_books(session, reader_id)
            writing = await books.list_writing_books(session, author_id)
            nothing = await books.list_writing_books(session, reader_id)
        await engine.dispose()
        return favorites, writing, nothing

    favorites, writing, nothing = asyncio.run(scenario())

    assert [book["title"] for book in favorites] == ["Public"]
    assert {book["title"] for book in writing} == {"Public", "Draft"}
    assert nothing == []


def test_book_view_hides_drafts_from_other_readers(database_url: str):
    async def scenario():
        engine, session_maker = await build_test_db(database_url)
        async with session_maker() as session:
            author_id = await seed_user(session, "writer")
            reader_id = await seed_user(session, "reader")
            book_id = await seed_book(session, author_id)
            public = await seed_chapter(session, book_id, "Public chapter")
            await seed_chapter(session, book_id, "Draft chapter", published=False)
            await like_chapter(session, public, reader_id)

            as_author = await composer.get_book_with_chapters(session, book_id, author_id)
            as_reader = await composer.get_book_with_chapters(session, book_id, reader_id)
            anonymous = await composer.get_book_with_chapters(session, book_id)
            with pytest.raises(NotFound):
                await composer.get_book_with_chapters(session, book_id + 1, reader_id)
        await engine.dispose()
        return as_author, as_reader, anonymous

    as_author, as_reader, anonymous = asyncio.run(scenario())

    assert [c["title"] for c in as_author["chapters"]] == ["Public chapter", "Draft chapter"]
    assert [c["title"] for c in as_reader["chapters"]] == ["Public chapter"]
    assert as_reader["chapters"][0]["isLiked"] is True
    assert as_author["chapters"][0]["isLiked"] is False
    assert [c["isLiked"] for c in anonymous["chapters"]] == [False]
    assert as_reader["comments"] == []
