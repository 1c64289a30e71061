"""HTTP API for the analytics service."""

from .endpoints import stats_router, tournament_router, track_router

__all__ = [
    "track_router",
    "stats_router",
    "tournament_router",
]
