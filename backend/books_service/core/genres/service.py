"""Genre taxonomy: create-or-reuse by normalized name and usage statistics."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from books_service.core.errors import InvalidReference
from books_service.core.serializers import genre_out, ident
from books_service.core.transactions import atomic
from books_service.models.database import BookGenre, Genre

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


def normalize_genre_name(name: str) -> str:
    """Canonical genre identity: trimmed and lowercase."""
    return name.strip().lower()


def usage_percentage(usage_count: int, total: int) -> float:
    """Share of all associations, as a percentage rounded half-up to 2 places."""
    if total <= 0:
        return 0.0
    share = Decimal(usage_count) * 100 / Decimal(total)
    return float(share.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


async def create_or_reuse_genres(
    db: AsyncSession, names: Iterable[str]
) -> list[Genre]:
    """Resolve genre names to rows, inserting the ones that do not exist yet.

    Runs inside the caller's transaction and does not commit. Names are
    normalized and deduplicated; the result follows first-seen order.
    """
    normalized = list(dict.fromkeys(
        n for n in (normalize_genre_name(name) for name in names) if n
    ))
    if not normalized:
        return []

    dialect = db.get_bind().dialect.name
    upsert = _UPSERT_INSERTS.get(dialect)
    if upsert is not None:
        # ON CONFLICT keeps concurrent creators of the same name on one row
        await db.execute(
            upsert(Genre)
            .values([{"name": name} for name in normalized])
            .on_conflict_do_nothing(index_elements=["name"])
        )
    else:
        result = await db.execute(select(Genre.name).where(Genre.name.in_(normalized)))
        existing = set(result.scalars().all())
        missing = [name for name in normalized if name not in existing]
        if missing:
            await db.execute(insert(Genre).values([{"name": name} for name in missing]))

    result = await db.execute(select(Genre).where(Genre.name.in_(normalized)))
    by_name = {genre.name: genre for genre in result.scalars().all()}
    return [by_name[name] for name in normalized]


async def ensure_genres_exist(db: AsyncSession, genre_ids: Iterable[int]) -> list[int]:
    """Check that every id names an existing genre.

    Returns the ids deduplicated in first-seen order.

    Raises:
        InvalidReference: if any id is unknown
    """
    unique_ids = list(dict.fromkeys(int(genre_id) for genre_id in genre_ids))
    if not unique_ids:
        return []

    result = await db.execute(select(Genre.id).where(Genre.id.in_(unique_ids)))
    found = {int(genre_id) for genre_id in result.scalars().all()}
    missing = [genre_id for genre_id in unique_ids if genre_id not in found]
    if missing:
        raise InvalidReference(
            "One or more genres are not valid", missing_ids=missing
        )
    return unique_ids


async def create_genres(db: AsyncSession, names: list[str]) -> list[dict]:
    """Create (or reuse) a batch of genres and return them as ``{id, name}``."""
    async with atomic(db, "create genres"):
        genres = await create_or_reuse_genres(db, names)

    logger.info("Resolved %d genre name(s) to %d genre(s)", len(names), len(genres))
    return [genre_out(genre) for genre in genres]


async def get_genres_by_usage(db: AsyncSession) -> list[dict]:
    """Every genre with its association count and percentage share.

    Ordered by usage count descending, then name ascending. The total is the
    sum of the per-genre counts from the same query, so counts and
    percentages always agree.
    """
    usage_count = func.count(BookGenre.book_id).label("usage_count")
    result = await db.execute(
        select(Genre.id, Genre.name, usage_count)
        .outerjoin(BookGenre, BookGenre.genre_id == Genre.id)
        .group_by(Genre.id, Genre.name)
        .order_by(usage_count.desc(), Genre.name.asc())
    )
    rows = result.all()
    total = sum(row.usage_count for row in rows)

    return [
        {
            "id": ident(row.id),
            "name": row.name,
            "usage_count": row.usage_count,
            "percentage": usage_percentage(row.usage_count, total),
        }
        for row in rows
    ]
