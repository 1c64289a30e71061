"""Tests for the in-memory key/value store."""

import pytest

from spunk_analytics.store.base import KVStore
from spunk_analytics.store.memory import InMemoryKVStore


def test_memory_store_satisfies_protocol(store: InMemoryKVStore) -> None:
    assert isinstance(store, KVStore)


@pytest.mark.asyncio
async def test_put_then_get(store: InMemoryKVStore) -> None:
    await store.put("pv:total", "3", ttl_seconds=60)
    assert await store.get("pv:total") == "3"
    assert await store.get("pv:missing") is None


@pytest.mark.asyncio
async def test_values_expire_after_ttl(store: InMemoryKVStore, store_clock) -> None:
    await store.put("uv:2026-02-15", "[]", ttl_seconds=10)
    store_clock.advance(9)
    assert await store.get("uv:2026-02-15") == "[]"
    store_clock.advance(1)
    assert await store.get("uv:2026-02-15") is None


@pytest.mark.asyncio
async def test_list_keys_filters_prefix_and_expired(store: InMemoryKVStore, store_clock) -> None:
    await store.put("country:2026-02-15:US", "4", ttl_seconds=100)
    await store.put("country:2026-02-15:DE", "1", ttl_seconds=5)
    await store.put("country:total:US", "9", ttl_seconds=100)
    store_clock.advance(6)

    keys = await store.list_keys("country:2026-02-15:")
    assert keys == ["country:2026-02-15:US"]


@pytest.mark.asyncio
async def test_non_positive_ttl_rejected(store: InMemoryKVStore) -> None:
    with pytest.raises(ValueError):
        await store.put("pv:total", "1", ttl_seconds=0)
