"""Key/value store adapters."""

from .base import KVStore
from .memory import InMemoryKVStore
from .redis_store import RedisKVStore
from .session import close_store, get_store

__all__ = [
    "KVStore",
    "InMemoryKVStore",
    "RedisKVStore",
    "get_store",
    "close_store",
]
