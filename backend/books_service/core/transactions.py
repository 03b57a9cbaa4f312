"""Transaction boundary for multi-step mutations."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from books_service.core.errors import BooksServiceError, InternalFault

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(db: AsyncSession, operation: str) -> AsyncIterator[AsyncSession]:
    """Run the enclosed block as one unit of work.

    Commits on success. Any exception rolls the whole unit back; store
    errors are re-raised as ``InternalFault`` so callers never see driver
    detail.
    """
    try:
        yield db
        await db.commit()
    except BooksServiceError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Store failure during %s", operation)
        raise InternalFault(f"Store failure during {operation}") from exc
    except BaseException:
        await db.rollback()
        raise
