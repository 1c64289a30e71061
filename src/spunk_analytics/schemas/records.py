"""Value types persisted in the key/value store.

Both types own their storage format: ``encode`` produces the exact string
written to the store and ``decode`` tolerates absent or malformed values by
returning an empty/absent result instead of raising.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Player record counter field bumped by each scoring action
ACTION_FIELDS: dict[str, str] = {
    "referral": "referrals",
    "share": "shares",
    "game_win": "wins",
    "faucet_claim": "faucets",
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class MemberSet:
    """Insertion-ordered set of opaque string members stored as a JSON array."""

    def __init__(self, members: Iterable[str] = ()) -> None:
        self._members: dict[str, None] = dict.fromkeys(members)

    def __contains__(self, member: object) -> bool:
        return member in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"MemberSet({list(self._members)!r})"

    def add(self, member: str) -> bool:
        """Insert ``member`` and return True if it was not already present."""
        if member in self._members:
            return False
        self._members[member] = None
        return True

    def encode(self) -> str:
        """Return the JSON array representation written to the store."""
        return json.dumps(list(self._members))

    @classmethod
    def decode(cls, raw: str | None) -> MemberSet:
        """Parse a stored JSON array, returning an empty set when unusable."""
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
        except ValueError:
            return cls()
        if not isinstance(data, list):
            return cls()
        return cls(item for item in data if isinstance(item, str))


class PlayerRecord(BaseModel):
    """Per-wallet tournament score record."""

    wallet: str
    score: int = 0
    referrals: int = 0
    shares: int = 0
    wins: int = 0
    faucets: int = 0
    joined: int = Field(default_factory=_now_ms, description="Creation time in epoch ms")

    model_config = ConfigDict(extra="ignore")

    def award(self, action: str, points: int) -> None:
        """Add ``points`` and bump the counter field associated with ``action``."""
        self.score += points
        field_name = ACTION_FIELDS.get(action)
        if field_name is not None:
            setattr(self, field_name, getattr(self, field_name) + 1)

    def encode(self) -> str:
        """Return the JSON document written to the store."""
        return self.model_dump_json()

    @classmethod
    def decode(cls, raw: str | None) -> PlayerRecord | None:
        """Parse a stored record; absent or malformed values yield None."""
        if not raw:
            return None
        try:
            return cls.model_validate_json(raw)
        except ValidationError:
            return None
