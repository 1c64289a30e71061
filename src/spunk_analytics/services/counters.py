"""Counter and unique-set aggregation over the key/value store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from spunk_analytics.schemas.records import MemberSet
from spunk_analytics.store.base import KVStore

logger = logging.getLogger(__name__)


class CounterAggregator:
    """Read and bump JSON-encoded counters and member sets.

    Every mutation is a read followed by a write with no transaction around
    it. Two concurrent writers to the same key can both read the old value
    and one update is lost; the service accepts that drift in exchange for
    working against a store without atomic increments.

    Reads never raise: a missing, expired, unparsable or unreadable value is
    reported as zero or as an empty set.
    """

    def __init__(self, store: KVStore, counter_ttl_seconds: int) -> None:
        self._store = store
        self._counter_ttl_seconds = counter_ttl_seconds

    async def _safe_get(self, key: str) -> str | None:
        try:
            return await self._store.get(key)
        except Exception as exc:
            logger.warning("Store read failed for %s: %s", key, exc)
            return None

    async def read_counter(self, key: str) -> int:
        """Return the counter stored at ``key`` or 0."""
        raw = await self._safe_get(key)
        if not raw:
            return 0
        try:
            value = int(raw)
        except ValueError:
            return 0
        return max(value, 0)

    async def increment(self, key: str) -> int:
        """Add one to the counter at ``key`` and return the written value."""
        return await self.increment_by(key, 1)

    async def increment_by(self, key: str, amount: int) -> int:
        """Add ``amount`` to the counter at ``key`` and return the written value.

        Raises:
            ValueError: If ``amount`` is negative
        """
        if amount < 0:
            raise ValueError("Counters only move forward")
        current = await self.read_counter(key)
        updated = current + amount
        await self._store.put(key, str(updated), self._counter_ttl_seconds)
        return updated

    async def read_set(self, key: str) -> MemberSet:
        """Return the member set stored at ``key`` or an empty set."""
        return MemberSet.decode(await self._safe_get(key))

    async def add_to_set(self, key: str, member: str, ttl_seconds: int) -> bool:
        """Insert ``member`` into the set at ``key``.

        The set is written back only when the member was not already present.

        Returns:
            True if the member was newly added
        """
        members = await self.read_set(key)
        if not members.add(member):
            return False
        await self._store.put(key, members.encode(), ttl_seconds)
        return True

    async def read_counters(self, keys: Sequence[str]) -> list[int]:
        """Read several independent counters concurrently, preserving order."""
        return list(await asyncio.gather(*(self.read_counter(key) for key in keys)))

    async def set_sizes(self, keys: Sequence[str]) -> list[int]:
        """Return the cardinality of several member sets, preserving order."""
        sets = await asyncio.gather(*(self.read_set(key) for key in keys))
        return [len(members) for members in sets]

    async def list_keys(self, prefix: str) -> list[str]:
        """List live keys starting with ``prefix``; failures yield no keys."""
        try:
            return await self._store.list_keys(prefix)
        except Exception as exc:
            logger.warning("Store listing failed for %s: %s", prefix, exc)
            return []
