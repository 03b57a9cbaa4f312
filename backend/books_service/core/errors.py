"""Error taxonomy shared by the service layer and the HTTP layer.

Every error carries the HTTP status it maps to, so the exception handlers in
``books_service.api.errors`` stay a thin translation.
"""

from typing import Any, Optional


class BooksServiceError(Exception):
    """Base class for all expected service errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BooksServiceError):
    """Malformed or out-of-bounds input, with field-level detail."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidIdentifier(BooksServiceError, ValueError):
    """An identifier that is not a non-negative integer literal.

    Also a ``ValueError`` so pydantic validators report it as a field error.
    """

    status_code = 400


class NotFound(BooksServiceError):
    """The primary entity of an operation does not exist."""

    status_code = 404


class ReferenceNotFound(BooksServiceError):
    """A referenced secondary entity (author, user, book, chapter) is missing."""

    status_code = 404


class InvalidReference(BooksServiceError):
    """One or more supplied genre ids do not exist."""

    status_code = 400

    def __init__(self, message: str, missing_ids: Optional[list[int]] = None):
        super().__init__(message)
        self.missing_ids = missing_ids or []


class InternalFault(BooksServiceError):
    """Unexpected store or logic failure."""

    status_code = 500
