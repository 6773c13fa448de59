"""
Persistence Slot - Upstash Redis and in-process backends

The cart is kept in a single string-keyed slot that survives sessions.
Redis is the durable backend; MemorySlot keeps the same contract inside
the process (local development, tests).
"""

from typing import Dict, Optional, Protocol

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront import config
from storefront.errors import StorageError


# Singleton instance
_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _redis_client


class RedisKeys:
    """Persistence keys, namespaced by STORAGE_KEY."""

    CART = "cart"  # {STORAGE_KEY}:cart

    @staticmethod
    def cart_key(namespace: Optional[str] = None) -> str:
        return f"{namespace or config.STORAGE_KEY}:{RedisKeys.CART}"


class PersistenceSlot(Protocol):
    """String key/value slot used for session continuity."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


class RedisSlot:
    """Persistence slot backed by Upstash Redis."""

    def __init__(self, redis: Optional[AsyncRedis] = None):
        self._redis = redis  # Lazy initialization

    @property
    def redis(self) -> AsyncRedis:
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                raise StorageError(f"Redis not available: {e}") from e
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)


class MemorySlot:
    """Persistence slot kept in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)
