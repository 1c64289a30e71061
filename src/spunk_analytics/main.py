# src/spunk_analytics/main.py
"""Main entry point for the analytics service."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status

from spunk_analytics.api import stats_router, tournament_router, track_router
from spunk_analytics.api.errors import (
    INTERNAL_ERROR_MESSAGE,
    error_response,
    register_exception_handlers,
)
from spunk_analytics.core.settings import settings
from spunk_analytics.store.session import close_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Pseudonymous visitor analytics and tournament leaderboard API",
    version=settings.app_version,
)

register_exception_handlers(app)


@app.middleware("http")
async def cors_and_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Answer preflight requests, stamp CORS headers and catch unhandled errors.

    The front-end is served from arbitrary origins, so every response, error
    responses included, carries the same permissive CORS headers.
    """
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_200_OK)
    else:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error serving %s %s", request.method, request.url.path)
            response = error_response(
                INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
            )
    response.headers.update(settings.cors_headers)
    return response


# Include API routers
app.include_router(track_router)
app.include_router(stats_router)
app.include_router(tournament_router)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_store()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "tournament": settings.tournament_id,
    }


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run("spunk_analytics.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
