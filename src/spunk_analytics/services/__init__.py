"""Business logic services for the analytics service."""

from .counters import CounterAggregator
from .ingestion import EventIngestionService, RequestContext, TrackResult
from .stats import StatsReader
from .tournament import (
    InvalidActionError,
    SelfReferralError,
    TournamentEndedError,
    TournamentEngine,
    TournamentError,
)

__all__ = [
    "CounterAggregator",
    "EventIngestionService",
    "RequestContext",
    "TrackResult",
    "StatsReader",
    "TournamentEngine",
    "TournamentError",
    "TournamentEndedError",
    "InvalidActionError",
    "SelfReferralError",
]
