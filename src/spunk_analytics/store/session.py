"""Store construction and dependency injection."""

from __future__ import annotations

import logging
from functools import lru_cache

from spunk_analytics.core.settings import settings
from spunk_analytics.store.base import KVStore
from spunk_analytics.store.memory import InMemoryKVStore
from spunk_analytics.store.redis_store import RedisKVStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_store() -> KVStore:
    """Return the process-wide key/value store selected by ``KV_BACKEND``."""
    if settings.kv_backend == "memory":
        logger.warning("Using in-memory key/value store; data is not shared or durable")
        return InMemoryKVStore()
    logger.info("Using Redis key/value store")
    return RedisKVStore.from_url(settings.redis_url)


async def close_store() -> None:
    """Close the store created by :func:`get_store`, if any."""
    if get_store.cache_info().currsize == 0:
        return
    await get_store().close()
    get_store.cache_clear()
