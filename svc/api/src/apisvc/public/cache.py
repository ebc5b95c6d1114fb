from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod

from cachebox import TTLCache
from redis.exceptions import RedisError

from figstore.redis import RedisClient

from apisvc.config import ApiSettings
from apisvc.public.errors import CacheUnavailableError

_BACKEND_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


class SnapshotCache(ABC):
    """key -> serialized snapshot store with expiry.

    implementations raise CacheUnavailableError when the backend cannot
    serve a call; an expired or deleted entry reads as None.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    async def put(self, key: str, value: str, ttl: int) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    async def close(self) -> None:
        return None


class RedisSnapshotCache(SnapshotCache):
    """shared cache for multi-instance deployments; redis enforces the ttl."""

    def __init__(self, redis: RedisClient):
        self._redis = redis

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get_snapshot(key)
        except _BACKEND_ERRORS as e:
            raise CacheUnavailableError(f"redis get failed for {key}: {e}") from e

    async def put(self, key: str, value: str, ttl: int) -> None:
        try:
            await self._redis.set_snapshot(key, value, ttl=ttl)
        except _BACKEND_ERRORS as e:
            raise CacheUnavailableError(f"redis set failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete_snapshot(key)
        except _BACKEND_ERRORS as e:
            raise CacheUnavailableError(f"redis delete failed for {key}: {e}") from e

    async def close(self) -> None:
        await self._redis.close()


class MemorySnapshotCache(SnapshotCache):
    """in-process cache for single-instance and dev deployments.

    TTLCache bounds size and evicts at the configured ttl; the deadline
    stored next to each body makes a shorter per-put ttl take effect too.
    """

    def __init__(self, maxsize: int, ttl: float):
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    async def get(self, key: str) -> str | None:
        entry = self._cache.get(key)
        if entry is None:
            return None

        body, deadline = entry
        if time.monotonic() >= deadline:
            self._cache.pop(key, None)
            return None
        return body

    async def put(self, key: str, value: str, ttl: int) -> None:
        self._cache[key] = (value, time.monotonic() + ttl)

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)


def build_snapshot_cache(settings: ApiSettings, redis: RedisClient | None = None) -> SnapshotCache:
    if settings.snapshot_cache_backend == "memory":
        return MemorySnapshotCache(
            maxsize=settings.snapshot_memory_maxsize,
            ttl=settings.snapshot_cache_ttl
        )
    if redis is None:
        raise ValueError("redis snapshot cache backend requires a connected RedisClient")
    return RedisSnapshotCache(redis)
