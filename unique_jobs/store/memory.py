"""
In-process key-value store.

Useful for single-process deployments and tests. Every call yields to the
event loop before touching the data, so concurrent callers interleave at
the same points they would against a networked store.
"""

import asyncio

from unique_jobs.store.base import UpdateFn


class InMemoryStore:
    """Dictionary-backed store with the same async surface as RedisStore."""

    def __init__(self, data: dict[str, str] | None = None, latency_seconds: float = 0.0):
        """
        Args:
            data: Optional initial raw contents.
            latency_seconds: Simulated round-trip delay per call.
        """
        self._data: dict[str, str] = dict(data or {})
        self._latency = latency_seconds
        self._lock = asyncio.Lock()

    async def _round_trip(self) -> None:
        await asyncio.sleep(self._latency)

    async def get(self, key: str) -> str | None:
        await self._round_trip()
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._round_trip()
        self._data[key] = value

    async def transact(self, key: str, fn: UpdateFn, max_retries: int) -> str:
        # A lock is enough here: there is no other writer outside this process.
        async with self._lock:
            await self._round_trip()
            updated = fn(self._data.get(key))
            self._data[key] = updated
            return updated

    def raw(self, key: str) -> str | None:
        """Return the stored value without simulating a round trip."""
        return self._data.get(key)
