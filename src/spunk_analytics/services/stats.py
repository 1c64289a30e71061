"""Read-only projections of the aggregated counters."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from spunk_analytics.services.counters import CounterAggregator
from spunk_analytics.utils.time import day_bucket, isoformat_z, trailing_days, utcnow, week_start

HOURS_PER_DAY = 24
ADMIN_HISTORY_DAYS = 7


class StatsReader:
    """Assemble public and admin snapshots from independent counter reads.

    No figure is assumed to be consistent with any other: each is a separate
    store lookup, and lookups without ordering dependencies run concurrently.
    """

    def __init__(
        self,
        aggregator: CounterAggregator,
        *,
        known_games: Sequence[str],
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._counters = aggregator
        self._known_games = list(known_games)
        self._clock = clock

    async def public_snapshot(self) -> dict[str, Any]:
        """Return aggregate figures safe to expose to anyone."""
        now = self._clock()
        today = day_bucket(now)
        (today_uv, week_uv), counts = await asyncio.gather(
            self._counters.set_sizes([f"uv:{today}", f"uv:week:{week_start(now)}"]),
            self._counters.read_counters(
                [
                    f"pv:{today}",
                    "pv:total",
                    f"games:{today}:all",
                    "games:total:all",
                    f"wager:{today}",
                    "wager:total",
                    f"faucet:{today}",
                    "faucet:total",
                    "share:total",
                    "wallet:total",
                ]
            ),
        )
        (
            today_pv,
            total_pv,
            today_games,
            total_games,
            today_wager,
            total_wager,
            today_faucet,
            total_faucet,
            total_shares,
            total_wallets,
        ) = counts
        return {
            "today": {
                "unique_visitors": today_uv,
                "page_views": today_pv,
                "games_played": today_games,
                "wager_volume": today_wager,
                "faucet_claims": today_faucet,
            },
            "week": {
                "unique_visitors": week_uv,
            },
            "all_time": {
                "total_page_views": total_pv,
                "total_games": total_games,
                "total_wagered": total_wager,
                "total_faucet_claims": total_faucet,
                "total_shares": total_shares,
                "total_wallet_connects": total_wallets,
            },
            "timestamp": isoformat_z(now),
        }

    async def admin_snapshot(self) -> dict[str, Any]:
        """Return the detailed operator report for the trailing week."""
        now = self._clock()
        today = day_bucket(now)
        daily, games, countries, devices, hourly = await asyncio.gather(
            self._daily_series(trailing_days(now, ADMIN_HISTORY_DAYS)),
            self._game_breakdown(today),
            self._country_breakdown(today),
            self._counters.read_counters([f"device:{today}:mobile", f"device:{today}:desktop"]),
            self._counters.read_counters(
                [f"hour:{today}:{hour}" for hour in range(HOURS_PER_DAY)]
            ),
        )
        mobile, desktop = devices
        return {
            "daily": daily,
            "games": games,
            "countries": countries,
            "devices": {"mobile": mobile, "desktop": desktop},
            "hourly": {str(hour): count for hour, count in enumerate(hourly)},
            "timestamp": isoformat_z(now),
        }

    async def _daily_row(self, day: str) -> dict[str, Any]:
        (unique_visitors,), counts = await asyncio.gather(
            self._counters.set_sizes([f"uv:{day}"]),
            self._counters.read_counters(
                [f"pv:{day}", f"games:{day}:all", f"wager:{day}", f"faucet:{day}"]
            ),
        )
        page_views, games_played, wager_volume, faucet_claims = counts
        return {
            "date": day,
            "unique_visitors": unique_visitors,
            "page_views": page_views,
            "games_played": games_played,
            "wager_volume": wager_volume,
            "faucet_claims": faucet_claims,
        }

    async def _daily_series(self, days: Sequence[str]) -> list[dict[str, Any]]:
        return list(await asyncio.gather(*(self._daily_row(day) for day in days)))

    async def _game_breakdown(self, today: str) -> dict[str, dict[str, int]]:
        keys: list[str] = []
        for game in self._known_games:
            keys.extend((f"games:{today}:{game}", f"games:total:{game}"))
        counts = await self._counters.read_counters(keys)
        return {
            game: {"today": counts[2 * index], "total": counts[2 * index + 1]}
            for index, game in enumerate(self._known_games)
        }

    async def _country_breakdown(self, today: str) -> dict[str, int]:
        keys = await self._counters.list_keys(f"country:{today}:")
        counts = await self._counters.read_counters(keys)
        return {key.split(":")[-1]: count for key, count in zip(keys, counts, strict=True)}
