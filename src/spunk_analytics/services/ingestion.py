"""Event ingestion: fan tracking events out into counter updates."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from spunk_analytics.schemas.events import (
    FaucetClaimEvent,
    GamePlayEvent,
    ReferralClickEvent,
    ShareEvent,
    TrackEvent,
    VisitEvent,
    WalletConnectEvent,
)
from spunk_analytics.services.counters import CounterAggregator
from spunk_analytics.utils.hash import visitor_fingerprint
from spunk_analytics.utils.time import day_bucket, hour_of_day, utcnow, week_start

logger = logging.getLogger(__name__)

DEFAULT_MOBILE_TOKENS: tuple[str, ...] = ("Mobile", "Android", "iPhone")


@dataclass(frozen=True)
class RequestContext:
    """Network metadata of the request that carried an event."""

    address: str = "unknown"
    country: str = "??"
    user_agent: str = ""
    mobile_tokens: Sequence[str] = DEFAULT_MOBILE_TOKENS

    @property
    def device(self) -> str:
        """Classify the user agent as ``mobile`` or ``desktop``."""
        agent = self.user_agent.lower()
        if any(token.lower() in agent for token in self.mobile_tokens):
            return "mobile"
        return "desktop"


class TrackResult(BaseModel):
    """Acknowledgement returned for every tracked event."""

    ok: bool = True
    new_visitor: bool | None = None


class EventIngestionService:
    """Apply the counter updates associated with each event type."""

    def __init__(
        self,
        aggregator: CounterAggregator,
        *,
        visitor_set_ttl_seconds: int,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._counters = aggregator
        self._visitor_set_ttl_seconds = visitor_set_ttl_seconds
        self._clock = clock
        self._handlers: dict[
            type, Callable[[TrackEvent, RequestContext, datetime], Awaitable[TrackResult]]
        ] = {
            VisitEvent: self._visit,
            GamePlayEvent: self._game_play,
            FaucetClaimEvent: self._faucet_claim,
            WalletConnectEvent: self._wallet_connect,
            ShareEvent: self._share,
            ReferralClickEvent: self._referral_click,
        }

    async def ingest(self, event: TrackEvent, context: RequestContext) -> TrackResult:
        """Record ``event`` and return the acknowledgement for the caller.

        Unrecognised event types are acknowledged without touching the store.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.debug("Ignoring untracked event %r", event.event)
            return TrackResult()
        return await handler(event, context, self._clock())

    async def _bump(self, *keys: str) -> None:
        for key in keys:
            await self._counters.increment(key)

    async def _visit(self, event: VisitEvent, context: RequestContext, now: datetime) -> TrackResult:
        today = day_bucket(now)
        week = week_start(now)

        # Daily and weekly ids hash different buckets, so they never collide.
        daily_id = visitor_fingerprint(context.address, today)
        weekly_id = visitor_fingerprint(context.address, week)
        is_new = await self._counters.add_to_set(
            f"uv:{today}", daily_id, self._visitor_set_ttl_seconds
        )
        await self._counters.add_to_set(
            f"uv:week:{week}", weekly_id, self._visitor_set_ttl_seconds
        )

        await self._bump(
            f"pv:{today}",
            "pv:total",
            f"hour:{today}:{hour_of_day(now)}",
            f"country:{today}:{context.country}",
            f"country:total:{context.country}",
            f"device:{today}:{context.device}",
        )
        if event.ref:
            await self._bump(f"ref:{today}:{event.ref}", f"ref:total:{event.ref}")
        await self._bump(f"page:{today}:{event.page}")
        return TrackResult(new_visitor=is_new)

    async def _game_play(
        self, event: GamePlayEvent, context: RequestContext, now: datetime
    ) -> TrackResult:
        today = day_bucket(now)
        await self._bump(
            f"games:{today}:{event.game}",
            f"games:total:{event.game}",
            "games:total:all",
            f"games:{today}:all",
        )
        await self._counters.increment_by(f"wager:{today}", event.bet)
        await self._counters.increment_by("wager:total", event.bet)
        if event.is_win:
            await self._bump(f"wins:{today}:{event.game}", "wins:total")
        return TrackResult()

    async def _faucet_claim(
        self, event: FaucetClaimEvent, context: RequestContext, now: datetime
    ) -> TrackResult:
        await self._bump(f"faucet:{day_bucket(now)}", "faucet:total")
        return TrackResult()

    async def _wallet_connect(
        self, event: WalletConnectEvent, context: RequestContext, now: datetime
    ) -> TrackResult:
        await self._bump(f"wallet:{day_bucket(now)}", "wallet:total")
        return TrackResult()

    async def _share(self, event: ShareEvent, context: RequestContext, now: datetime) -> TrackResult:
        await self._bump(f"share:{day_bucket(now)}:{event.platform}", "share:total")
        return TrackResult()

    async def _referral_click(
        self, event: ReferralClickEvent, context: RequestContext, now: datetime
    ) -> TrackResult:
        today = day_bucket(now)
        if event.code:
            await self._bump(f"refclick:{today}:{event.code}", f"refclick:total:{event.code}")
        await self._bump(f"refclick:{today}")
        return TrackResult()
