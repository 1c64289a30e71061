"""Tournament-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from spunk_analytics.schemas.common import scalar_text


class TournamentConfig(BaseModel):
    """Static configuration of a single tournament instance."""

    id: str
    name: str
    end_time: int = Field(..., description="End of the scoring window, Unix seconds")
    points: dict[str, int]
    prize: dict[str, Any] = Field(default_factory=dict, description="Opaque prize metadata")

    def has_ended(self, now: datetime) -> bool:
        """Return True once ``now`` has reached the configured end time."""
        return now.timestamp() >= self.end_time

    def points_for(self, action: str) -> int | None:
        """Return the positive point value of ``action`` or None if unscored."""
        points = self.points.get(action)
        if not points or points <= 0:
            return None
        return points


class _WalletRequest(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        # Falsy scalars count as missing; lists and objects fail validation.
        if isinstance(value, int | float) and not value:
            return None
        text = scalar_text(value)
        return value if text is None else text


class ActionRequest(_WalletRequest):
    """Body of ``POST /tournament/action``."""

    wallet: str | None = None
    action: str | None = None


class ReferralRequest(_WalletRequest):
    """Body of ``POST /tournament/referral``."""

    referrer: str | None = None
    referred: str | None = None
