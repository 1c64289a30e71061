"""Tests for the Redis store adapter using a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from spunk_analytics.store.redis_store import RedisKVStore, escape_glob


def test_escape_glob_handles_metacharacters() -> None:
    assert escape_glob("country:??:") == r"country:\?\?:"
    assert escape_glob("ref:[x]*") == r"ref:\[x\]\*"
    assert escape_glob("pv:2026-02-15") == "pv:2026-02-15"


@pytest.mark.asyncio
async def test_get_decodes_bytes() -> None:
    client = MagicMock()
    client.get = AsyncMock(return_value=b"12")
    store = RedisKVStore(client)

    assert await store.get("pv:total") == "12"
    client.get.assert_awaited_once_with("pv:total")


@pytest.mark.asyncio
async def test_put_sets_expiry() -> None:
    client = MagicMock()
    client.set = AsyncMock()
    store = RedisKVStore(client)

    await store.put("pv:total", "13", ttl_seconds=3600)

    client.set.assert_awaited_once_with("pv:total", "13", ex=3600)


@pytest.mark.asyncio
async def test_list_keys_scans_escaped_prefix() -> None:
    async def _scan_iter(match: str, count: int):
        for key in ("country:2026-02-15:US", b"country:2026-02-15:DE"):
            yield key

    client = MagicMock()
    client.scan_iter = MagicMock(side_effect=_scan_iter)
    store = RedisKVStore(client, scan_count=50)

    keys = await store.list_keys("country:2026-02-15:")

    assert keys == ["country:2026-02-15:US", "country:2026-02-15:DE"]
    client.scan_iter.assert_called_once_with(match="country:2026-02-15:*", count=50)


@pytest.mark.asyncio
async def test_close_releases_pool() -> None:
    client = MagicMock()
    client.aclose = AsyncMock()
    store = RedisKVStore(client)

    await store.close()

    client.aclose.assert_awaited_once()
