"""Tournament scoring and leaderboard service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Final

from spunk_analytics.schemas.records import PlayerRecord
from spunk_analytics.schemas.tournament import TournamentConfig
from spunk_analytics.services.counters import CounterAggregator
from spunk_analytics.store.base import KVStore
from spunk_analytics.utils.time import utcnow

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE: Final[int] = 10
REFERRAL_ACTION: Final[str] = "referral"


class TournamentError(ValueError):
    """Base exception for rejected tournament operations."""

    ended: bool = False


class TournamentEndedError(TournamentError):
    """Raised when a scoring write arrives at or after the end time."""

    ended = True

    def __init__(self) -> None:
        super().__init__("Tournament ended")


class InvalidActionError(TournamentError):
    """Raised for actions without a configured point value."""

    def __init__(self, action: str) -> None:
        super().__init__("Invalid action")
        self.action = action


class SelfReferralError(TournamentError):
    """Raised when a wallet tries to refer itself."""

    def __init__(self) -> None:
        super().__init__("Cannot refer yourself")


def mask_wallet(wallet: str) -> str:
    """Return the display form of a wallet: first 8 and last 4 characters."""
    return f"{wallet[:8]}...{wallet[-4:]}"


class TournamentEngine:
    """Per-wallet score records, roster and leaderboard for one tournament.

    Player records are read, modified and written back without any locking.
    Two concurrent actions for the same wallet can both start from the same
    stored score, in which case one award is lost. The roster set is kept
    separately from the records and may name wallets whose record has
    expired; those wallets are skipped when ranking.
    """

    def __init__(
        self,
        store: KVStore,
        aggregator: CounterAggregator,
        config: TournamentConfig,
        *,
        ttl_seconds: int,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._counters = aggregator
        self._config = config
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    # --- Key layout -----------------------------------------------------------------
    def _record_key(self, wallet: str) -> str:
        return f"t:{self._config.id}:{wallet}"

    @property
    def _roster_key(self) -> str:
        return f"t:{self._config.id}:players"

    def _referrals_key(self, referrer: str) -> str:
        return f"t:{self._config.id}:refs:{referrer}"

    # --- State helpers --------------------------------------------------------------
    def has_ended(self) -> bool:
        """Return True once the scoring window has closed."""
        return self._config.has_ended(self._clock())

    async def _load_record(self, wallet: str) -> PlayerRecord | None:
        return PlayerRecord.decode(await self._store.get(self._record_key(wallet)))

    async def _award(self, wallet: str, action: str, points: int) -> PlayerRecord:
        record = await self._load_record(wallet) or PlayerRecord(wallet=wallet)
        record.award(action, points)
        await self._store.put(self._record_key(wallet), record.encode(), self._ttl_seconds)
        await self._counters.add_to_set(self._roster_key, wallet, self._ttl_seconds)
        return record

    async def _ranked_players(self) -> list[PlayerRecord]:
        """Load every rostered record and sort by descending score.

        ``list.sort`` is stable, so equal scores keep roster order.
        """
        roster = list(await self._counters.read_set(self._roster_key))
        raw_records = await asyncio.gather(
            *(self._store.get(self._record_key(wallet)) for wallet in roster)
        )
        players = [
            record
            for record in (PlayerRecord.decode(raw) for raw in raw_records)
            if record is not None
        ]
        players.sort(key=lambda record: record.score, reverse=True)
        return players

    # --- Operations -----------------------------------------------------------------
    async def record_action(self, wallet: str, action: str) -> dict[str, int]:
        """Award the points for ``action`` to ``wallet``.

        Returns:
            The wallet's new score and the points earned

        Raises:
            TournamentEndedError: If the tournament has ended
            InvalidActionError: If ``action`` carries no points
        """
        if self.has_ended():
            raise TournamentEndedError()
        points = self._config.points_for(action)
        if points is None:
            raise InvalidActionError(action)

        record = await self._award(wallet, action, points)
        logger.info("Awarded %d points to %s for %s", points, wallet, action)
        return {"score": record.score, "points_earned": points}

    async def record_referral(self, referrer: str, referred: str) -> dict[str, Any]:
        """Reward ``referrer`` once for bringing in ``referred``.

        Repeated calls for the same pair return ``{"already_counted": True}``
        without changing any state.

        Raises:
            SelfReferralError: If both wallets are the same
            TournamentEndedError: If the tournament has ended
        """
        if referrer == referred:
            raise SelfReferralError()
        if self.has_ended():
            raise TournamentEndedError()

        is_new = await self._counters.add_to_set(
            self._referrals_key(referrer), referred, self._ttl_seconds
        )
        if not is_new:
            return {"already_counted": True}

        points = self._config.points_for(REFERRAL_ACTION) or 0
        record = await self._award(referrer, REFERRAL_ACTION, points)
        logger.info("Referral %s -> %s earned %d points", referrer, referred, points)
        return {"referrer_score": record.score, "points_earned": points}

    async def leaderboard(self, wallet: str | None = None) -> dict[str, Any]:
        """Return the top players, the caller's rank and the winner once ended."""
        players = await self._ranked_players()
        top = [
            {
                "rank": index + 1,
                "wallet": mask_wallet(player.wallet),
                "walletFull": player.wallet,
                "score": player.score,
                "referrals": player.referrals,
                "shares": player.shares,
                "wins": player.wins,
            }
            for index, player in enumerate(players[:LEADERBOARD_SIZE])
        ]

        my_rank = None
        if wallet:
            for index, player in enumerate(players):
                if player.wallet == wallet:
                    my_rank = {
                        "rank": index + 1,
                        "score": player.score,
                        "referrals": player.referrals,
                        "shares": player.shares,
                        "wins": player.wins,
                    }
                    break

        ended = self.has_ended()
        return {
            "tournament": self._config.id,
            "total_players": len(players),
            "leaderboard": top,
            "my_rank": my_rank,
            "ended": ended,
            "winner": top[0] if ended and top else None,
        }

    async def player_status(self, wallet: str) -> dict[str, Any]:
        """Return a wallet's record with its rank, or a zeroed placeholder."""
        record = await self._load_record(wallet)
        if record is None:
            return {"score": 0, "referrals": 0, "shares": 0, "wins": 0, "faucets": 0, "rank": None}

        players = await self._ranked_players()
        rank = next(
            (index + 1 for index, player in enumerate(players) if player.wallet == wallet),
            None,
        )
        return {**record.model_dump(), "rank": rank, "total_players": len(players)}

    async def info(self) -> dict[str, Any]:
        """Return tournament metadata; available before and after the end."""
        roster = await self._counters.read_set(self._roster_key)
        return {
            "id": self._config.id,
            "name": self._config.name,
            "endTime": self._config.end_time,
            "ended": self.has_ended(),
            "prize": self._config.prize,
            "points": self._config.points,
            "total_players": len(roster),
        }
