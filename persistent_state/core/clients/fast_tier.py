"""Fast tier client - Redis with per-entry TTL.

The storage clients only depend on FastTierClient, so any object with the
same async get/set/delete surface (redis.asyncio.Redis in production, an
in-memory fake in tests) can be injected.

Pattern: Protocol duck typing with async adapter
"""

from typing import Protocol, runtime_checkable

import redis.asyncio as aioredis

from persistent_state.core.config import Settings, get_settings
from persistent_state.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class FastTierClient(Protocol):
    """Protocol for the fast tier.

    Allows dependency injection of Redis client implementations
    for testing (FakeRedisClient) and production (redis.asyncio.Redis).
    """

    async def get(self, key: str) -> str | bytes | None:
        """Get a value, or None on miss (never written or expired)."""
        ...

    async def set(
        self,
        key: str,
        value: str,
        ex: int | None = None,
    ) -> bool | None:
        """Set a value with expiry in seconds."""
        ...

    async def delete(self, key: str) -> int:
        """Delete a key; deleting a missing key is not an error."""
        ...


async def create_fast_tier_client(settings: Settings | None = None) -> aioredis.Redis:
    """Create and verify a Redis client for the fast tier.

    Args:
        settings: Application settings. Uses get_settings() if not provided.

    Returns:
        Connected redis.asyncio.Redis instance.

    Raises:
        redis.exceptions.ConnectionError: If Redis is unreachable.
    """
    settings = settings or get_settings()
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
    )
    try:
        await client.ping()
    except Exception:
        await client.aclose()
        raise

    logger.info("Fast tier client initialized", url=settings.redis_url)
    return client


async def close_fast_tier_client(client: aioredis.Redis) -> None:
    """Close the Redis connection pool."""
    await client.aclose()
    logger.info("Fast tier client closed")
