"""Telemetry event schemas accepted by ``POST /track``.

Events form a closed tagged union keyed by the ``event`` field. Any event
name outside the known set parses to :class:`UnknownEvent`, which ingestion
acknowledges without side effects. Optional fields are coerced leniently so
that a payload is only ever rejected for a missing event name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from spunk_analytics.schemas.common import scalar_text


class MissingEventError(ValueError):
    """Raised when a tracking payload carries no event name."""

    def __init__(self) -> None:
        super().__init__("Missing event")


class _TrackEventBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Map JSON-falsy values to the field default and scalars to text."""
        if info.field_name == "event":
            return value
        field = cls.model_fields[info.field_name]
        if value is None or (isinstance(value, str | int | float) and not value):
            return field.default
        if field.annotation is str and not isinstance(value, str):
            text = scalar_text(value)
            return field.default if text is None else text
        return value


class VisitEvent(_TrackEventBase):
    """A page view from the front-end."""

    event: Literal["visit"]
    ref: str = ""
    page: str = "home"


class GamePlayEvent(_TrackEventBase):
    """A finished game round with its wager and outcome."""

    event: Literal["game_play"]
    game: str = "unknown"
    bet: int = 0
    result: str = ""

    @field_validator("bet", mode="before")
    @classmethod
    def _coerce_bet(cls, value: Any) -> int:
        # Wager volume is an integer counter; unusable amounts count as zero.
        if isinstance(value, bool):
            return 0
        try:
            amount = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(amount, 0)

    @property
    def is_win(self) -> bool:
        return self.result == "win"


class FaucetClaimEvent(_TrackEventBase):
    event: Literal["faucet_claim"]


class WalletConnectEvent(_TrackEventBase):
    event: Literal["wallet_connect"]


class ShareEvent(_TrackEventBase):
    event: Literal["share"]
    platform: str = "x"


class ReferralClickEvent(_TrackEventBase):
    event: Literal["referral_click"]
    code: str = ""


class UnknownEvent(_TrackEventBase):
    """Any event name this service does not aggregate."""

    event: str


TrackEvent = (
    VisitEvent
    | GamePlayEvent
    | FaucetClaimEvent
    | WalletConnectEvent
    | ShareEvent
    | ReferralClickEvent
    | UnknownEvent
)

_EVENT_TYPES: dict[str, type[_TrackEventBase]] = {
    "visit": VisitEvent,
    "game_play": GamePlayEvent,
    "faucet_claim": FaucetClaimEvent,
    "wallet_connect": WalletConnectEvent,
    "share": ShareEvent,
    "referral_click": ReferralClickEvent,
}


def parse_event(body: Mapping[str, Any]) -> TrackEvent:
    """Classify a raw tracking payload into its event variant.

    Args:
        body: Decoded JSON object posted by the front-end

    Returns:
        The matching event model, or ``UnknownEvent`` for unrecognised names

    Raises:
        MissingEventError: If the payload has no usable ``event`` value
    """
    name = body.get("event")
    if not name:
        raise MissingEventError()
    if not isinstance(name, str):
        return UnknownEvent(event=str(name))
    model = _EVENT_TYPES.get(name)
    if model is None:
        return UnknownEvent(event=name)
    return model.model_validate(dict(body))  # type: ignore[return-value]
