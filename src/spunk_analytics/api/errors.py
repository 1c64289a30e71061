"""Translation of exceptions into the ``{"error": ...}`` response envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from spunk_analytics.schemas.events import MissingEventError
from spunk_analytics.services.tournament import TournamentError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Not found"
INTERNAL_ERROR_MESSAGE = "Internal error"
INVALID_REQUEST_MESSAGE = "Invalid request"


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    """Build a JSON error body of the form ``{"error": message, **extra}``."""
    return JSONResponse({"error": message, **extra}, status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths look the same to callers.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
    return error_response(str(exc.detail), exc.status_code)


async def tournament_error_handler(request: Request, exc: TournamentError) -> JSONResponse:
    if exc.ended:
        return error_response(str(exc), status.HTTP_400_BAD_REQUEST, ended=True)
    return error_response(str(exc), status.HTTP_400_BAD_REQUEST)


async def missing_event_handler(request: Request, exc: MissingEventError) -> JSONResponse:
    return error_response(str(exc), status.HTTP_400_BAD_REQUEST)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected malformed request to %s: %s", request.url.path, exc)
    return error_response(INVALID_REQUEST_MESSAGE, status.HTTP_400_BAD_REQUEST)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TournamentError, tournament_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(MissingEventError, missing_event_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
