"""Redis-backed key/value store."""

from __future__ import annotations

import logging
import re

import redis.asyncio as redis

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so ``text`` matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)


class RedisKVStore:
    """Store adapter translating get/put/list onto GET, SET EX and SCAN."""

    def __init__(self, client: redis.Redis, scan_count: int = 500) -> None:
        self._redis = client
        self._scan_count = scan_count

    @classmethod
    def from_url(cls, url: str) -> RedisKVStore:
        """Create a store connected to the Redis instance at ``url``."""
        return cls(redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._redis.set(key, value, ex=int(ttl_seconds))

    async def list_keys(self, prefix: str) -> list[str]:
        keys: list[str] = []
        async for key in self._redis.scan_iter(
            match=f"{escape_glob(prefix)}*", count=self._scan_count
        ):
            keys.append(key.decode() if isinstance(key, bytes) else key)
        return keys

    async def close(self) -> None:
        await self._redis.aclose()
        logger.debug("Closed Redis connection pool")
