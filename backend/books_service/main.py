"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from books_service.api.errors import register_exception_handlers
from books_service.api.responses import WireJSONResponse
from books_service.api.routes import books, chapters, comments, genres
from books_service.config import settings
from books_service.models.database.base import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    await init_db()
    logger.info("%s %s started", settings.app_name, settings.version)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Books, chapters, comments and genres",
    version=settings.version,
    lifespan=lifespan,
    default_response_class=WireJSONResponse,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers. /genres, /search and /chapters/... must be registered
# before the /{book_id} routes
app.include_router(genres.router, prefix="/api/books", tags=["genres"])
app.include_router(chapters.router, prefix="/api/books", tags=["chapters"])
app.include_router(comments.router, prefix="/api/books", tags=["comments"])
app.include_router(books.router, prefix="/api/books", tags=["books"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": settings.version}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("books_service.main:app", host=settings.host, port=settings.port)
