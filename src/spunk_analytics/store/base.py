"""Key/value store capability consumed by the services."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KVStore(Protocol):
    """Eventually-consistent string store with per-key expiration.

    Implementations make no multi-key transaction or read-after-write
    guarantees. An expired key reads back as ``None``.
    """

    async def get(self, key: str) -> str | None: ...

    async def put(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def list_keys(self, prefix: str) -> list[str]: ...

    async def close(self) -> None: ...
