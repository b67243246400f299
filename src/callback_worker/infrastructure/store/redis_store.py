"""Redis-backed store of pending callback records."""
from __future__ import annotations

import logging
from datetime import timedelta

import redis.asyncio as aioredis

from callback_worker.application.exceptions import RecordNotFoundError

logger = logging.getLogger(__name__)


class RedisCallbackStore:
    """Implements application.ports.store.CallbackStore."""

    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    async def scan(self, cursor: int, pattern: str, count: int) -> tuple[list[str], int]:
        next_cursor, keys = await self._redis.scan(cursor=cursor, match=pattern, count=count)
        return list(keys), int(next_cursor)

    async def get(self, key: str) -> str:
        value = await self._redis.get(key)
        if value is None:
            raise RecordNotFoundError(key)
        return value

    async def set_with_expiry(self, key: str, value: str, ttl: timedelta) -> None:
        await self._redis.set(key, value, ex=ttl)

    async def delete(self, key: str) -> None:
        removed = await self._redis.delete(key)
        if not removed:
            logger.debug("Key %s already absent", key)


def create_redis(url: str, max_connections: int) -> aioredis.Redis:
    return aioredis.from_url(
        url,
        decode_responses=True,
        max_connections=max_connections,
    )
