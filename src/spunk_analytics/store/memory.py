"""Process-local key/value store used for tests and single-node runs."""

from __future__ import annotations

import time
from collections.abc import Callable


class InMemoryKVStore:
    """Dictionary-backed store honouring per-key TTLs.

    Expiry is evaluated lazily on access against ``clock``, which defaults to
    ``time.monotonic`` and can be replaced to simulate the passage of time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._values: dict[str, tuple[str, float]] = {}

    def _live(self, key: str) -> str | None:
        entry = self._values.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            self._values.pop(key, None)
            return None
        return value

    async def get(self, key: str) -> str | None:
        return self._live(key)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._values[key] = (value, self._clock() + ttl_seconds)

    async def list_keys(self, prefix: str) -> list[str]:
        candidates = [key for key in self._values if key.startswith(prefix)]
        return [key for key in candidates if self._live(key) is not None]

    async def close(self) -> None:
        return None

    def snapshot(self) -> dict[str, str]:
        """Return all live keys and values; intended for tests and debugging."""
        return {key: value for key in list(self._values) if (value := self._live(key)) is not None}
