"""Best-effort follower notifications.

Posts to an external notification service after a book is created or a
chapter is published. Failures are logged and dropped; they never affect
the mutation that triggered them.
"""

import logging
from typing import Any

import httpx

from books_service.config import settings
from books_service.core.identifiers import encode

logger = logging.getLogger(__name__)

NEW_BOOK_MESSAGE = "An author you follow just published a new book."
NEW_CHAPTER_MESSAGE = "A book you follow just published a new chapter."


async def _post(path: str, payload: dict[str, Any]) -> bool:
    """POST ``payload`` to the notification service. Returns True on 2xx."""
    if not settings.notification_url:
        logger.debug("Notification URL not configured, skipping %s", path)
        return False

    url = f"{settings.notification_url.rstrip('/')}{path}"
    try:
        async with httpx.AsyncClient(timeout=settings.notification_timeout) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Notification to %s failed: %s", url, e)
        return False
    return True


async def notify_author_followers(author_id: int, title: str) -> bool:
    """Tell the author's followers about a new book."""
    return await _post("/notify/author", {
        "authorId": encode(author_id),
        "title": title,
        "body": NEW_BOOK_MESSAGE,
    })


async def notify_book_followers(book_id: int, title: str) -> bool:
    """Tell the book's followers about a newly published chapter."""
    return await _post("/notify/book", {
        "bookId": encode(book_id),
        "title": title,
        "body": NEW_CHAPTER_MESSAGE,
    })
