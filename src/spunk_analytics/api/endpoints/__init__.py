"""API endpoint modules."""

from .stats import router as stats_router
from .track import router as track_router
from .tournament import router as tournament_router

__all__ = [
    "track_router",
    "stats_router",
    "tournament_router",
]
