"""
Redis-backed key-value store using the redis-py asyncio client.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError, WatchError

from unique_jobs.config import get_settings
from unique_jobs.exceptions import StoreAccessError
from unique_jobs.store.base import UpdateFn

logger = logging.getLogger(__name__)


class RedisStore:
    """
    Store adapter over a Redis server.

    `get`/`set` map onto GET/SET. `transact` runs an optimistic
    WATCH/MULTI/EXEC loop so the read-modify-write of a key is only applied
    if nobody else wrote it in between.
    """

    def __init__(self, client: redis.Redis):
        """
        Args:
            client: A redis.asyncio client created with decode_responses=True.
        """
        self._client = client

    @classmethod
    def from_url(cls, url: str | None = None) -> "RedisStore":
        """Create a store from a Redis URL. Defaults to REDIS_URL."""
        settings = get_settings()
        client = redis.Redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_socket_timeout_seconds,
        )
        return cls(client)

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise StoreAccessError(key, str(e)) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client.set(key, value)
        except RedisError as e:
            raise StoreAccessError(key, str(e)) from e

    async def transact(self, key: str, fn: UpdateFn, max_retries: int) -> str:
        """
        Apply `fn` to the current value of `key` atomically.

        Args:
            key: The key to update.
            fn: Maps the current raw value (None when absent) to the new one.
            max_retries: Attempts before giving up on contention.

        Returns:
            The value that was written.

        Raises:
            StoreAccessError: On Redis errors or when retries are exhausted.
        """
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for attempt in range(1, max_retries + 1):
                    try:
                        await pipe.watch(key)
                        current = await pipe.get(key)
                        updated = fn(current)
                        pipe.multi()
                        pipe.set(key, updated)
                        await pipe.execute()
                        return updated
                    except WatchError:
                        logger.debug(
                            "Concurrent write detected, retrying",
                            extra={"key": key, "attempt": attempt},
                        )
        except RedisError as e:
            raise StoreAccessError(key, str(e)) from e

        raise StoreAccessError(key, f"gave up after {max_retries} conflicting writes")

    async def ping(self) -> bool:
        """Check connectivity."""
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
