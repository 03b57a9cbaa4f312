"""Genre API routes."""

from fastapi import APIRouter

from books_service.api.dependencies import DbSession
from books_service.api.responses import ok
from books_service.core.genres import service as genres
from books_service.models.schemas import CreateGenresRequest

router = APIRouter()


@router.get("/genres")
async def get_genres_by_usage(db: DbSession):
    """All genres with usage counts and percentages, most used first."""
    return ok("Genres retrieved successfully", await genres.get_genres_by_usage(db))


@router.post("/genres", status_code=201)
async def create_genres(request: CreateGenresRequest, db: DbSession):
    """Create genres by name, reusing any that already exist."""
    created = await genres.create_genres(db, request.name)
    return ok("Genres created successfully", created)
