"""Exception handlers mapping the service error taxonomy to HTTP."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from books_service.api.responses import WireJSONResponse, failure
from books_service.config import settings
from books_service.core.errors import (
    BooksServiceError,
    InternalFault,
    InvalidReference,
    ValidationError,
)
from books_service.models.schemas import format_errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def books_service_error_handler(request: Request, exc: BooksServiceError) -> WireJSONResponse:
    if isinstance(exc, InternalFault):
        body = failure(INTERNAL_ERROR_MESSAGE)
        if settings.debug:
            body["detail"] = exc.message
    elif isinstance(exc, ValidationError):
        body = failure(exc.message, errors=exc.errors)
    elif isinstance(exc, InvalidReference):
        body = failure(exc.message, missingIds=[str(genre_id) for genre_id in exc.missing_ids])
    else:
        body = failure(exc.message)
    return WireJSONResponse(status_code=exc.status_code, content=body)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> WireJSONResponse:
    return WireJSONResponse(
        status_code=400,
        content=failure("Invalid data", errors=format_errors(exc.errors())),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> WireJSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = failure(INTERNAL_ERROR_MESSAGE)
    if settings.debug:
        body["detail"] = str(exc)
    return WireJSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BooksServiceError, books_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
