from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from figstore.postgres.session import init_db, create_tables, dispose_db
from figstore.redis.client import RedisClient

from apisvc.admin import AdminService
from apisvc.config import ApiSettings
from apisvc.public.cache import SnapshotCache, build_snapshot_cache
from apisvc.public.invalidator import Invalidator
from apisvc.public.service import PublicService

logger = logging.getLogger(__name__)


class ApiService:
    """owns connections and wires the read and write paths to one cache."""

    def __init__(self, settings: ApiSettings):
        self._settings = settings
        self._redis: RedisClient | None = None
        self._cache: SnapshotCache | None = None
        self.public: PublicService | None = None
        self.admin: AdminService | None = None

    async def start(self) -> None:
        session_factory = init_db(self._settings.postgres_settings())
        await create_tables()

        if self._settings.snapshot_cache_backend == "redis":
            self._redis = RedisClient(self._settings.redis_settings())
            await self._redis.connect()

        self.wire(session_factory, build_snapshot_cache(self._settings, self._redis))
        logger.info(f"snapshot cache backend: {self._settings.snapshot_cache_backend}")

    def wire(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: SnapshotCache,
    ) -> None:
        """build both paths over an existing session factory and cache."""
        self._cache = cache
        invalidator = Invalidator(cache, key_prefix=self._settings.snapshot_key_prefix)
        self.public = PublicService(self._settings, cache, session_factory)
        self.admin = AdminService(session_factory, invalidator)

    async def stop(self) -> None:
        if self.public:
            await self.public.drain()
        if self._cache:
            await self._cache.close()
        await dispose_db()
