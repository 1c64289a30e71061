"""
Pydantic schemas and stored value types.

These schemas define the structure of API payloads and of the JSON values
kept in the key/value store.
"""

from .events import MissingEventError, TrackEvent, parse_event
from .records import MemberSet, PlayerRecord
from .tournament import ActionRequest, ReferralRequest, TournamentConfig

__all__ = [
    "MissingEventError", "TrackEvent", "parse_event",
    "MemberSet", "PlayerRecord",
    "ActionRequest", "ReferralRequest", "TournamentConfig",
]
