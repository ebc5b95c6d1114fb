from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from figlog import snapshot_scope
from figstore.postgres.models import Environment
from figstore.postgres.session import session_scope

from apisvc.config import ApiSettings
from apisvc.public.builder import SnapshotBuilder
from apisvc.public.cache import SnapshotCache
from apisvc.public.errors import (
    CacheUnavailableError,
    EnvironmentNotFoundError,
    ProjectNotFoundError,
    UpstreamStoreError,
)
from apisvc.public.etag import compute_etag, etag_matches
from apisvc.public.key import derive_cache_key
from apisvc.public.model import SnapshotResponse
from apisvc.repository import ProjectRepository, EnvironmentRepository

logger = logging.getLogger(__name__)


class PublicService:
    """serves public snapshots: cache first, record store on a miss.

    the etag is recomputed from the body on every request instead of being
    stored beside it, so the validator always matches the bytes served.
    repopulation runs as a detached task and never holds up the response.
    """

    def __init__(
        self,
        settings: ApiSettings,
        cache: SnapshotCache,
        session_factory: async_sessionmaker[AsyncSession],
        builder: SnapshotBuilder | None = None,
    ):
        self._settings = settings
        self._cache = cache
        self._session_factory = session_factory
        self._builder = builder or SnapshotBuilder(session_factory)
        self._pending: set[asyncio.Task] = set()

    async def resolve(
        self,
        project_slug: str,
        environment_slug: str,
        if_none_match: str | None = None,
    ) -> SnapshotResponse:
        """resolve the snapshot for a project/environment pair.

        raises:
            ProjectNotFoundError: no project with this slug
            EnvironmentNotFoundError: no such environment under that project
            UpstreamStoreError: record store unavailable on a cache miss
        """
        with snapshot_scope(project_slug, environment_slug):
            key = derive_cache_key(
                project_slug, environment_slug, self._settings.snapshot_key_prefix
            )

            cached = await self._lookup(key)
            # a blank entry is a miss, not an empty 200
            if cached:
                return self._respond(cached, if_none_match, from_cache=True)

            try:
                environment = await self._resolve_environment(project_slug, environment_slug)
                snapshot = await self._builder.build(environment.id)
            except (SQLAlchemyError, OSError) as e:
                logger.error(f"record store read failed: {e}")
                raise UpstreamStoreError("record store unavailable") from e

            body = snapshot.serialize()
            self._schedule_put(key, body)
            return self._respond(body, if_none_match, from_cache=False)

    async def _lookup(self, key: str) -> str | None:
        try:
            return await self._cache.get(key)
        except CacheUnavailableError as e:
            logger.warning(f"snapshot cache read failed, falling back to store: {e}")
            return None

    async def _resolve_environment(self, project_slug: str, environment_slug: str) -> Environment:
        async with session_scope(self._session_factory) as session:
            project = await ProjectRepository(session).get_by_slug(project_slug)
            if project is None:
                raise ProjectNotFoundError(project_slug)

            environment = await EnvironmentRepository(session).get_by_slug(
                project.id, environment_slug
            )
            if environment is None:
                raise EnvironmentNotFoundError(environment_slug, project_slug)
            return environment

    def _respond(self, body: str, if_none_match: str | None, from_cache: bool) -> SnapshotResponse:
        etag = compute_etag(body, self._settings.etag_length)
        if etag_matches(if_none_match, etag):
            return SnapshotResponse(
                status=304,
                etag=etag,
                cache_control=self._settings.cache_control,
                from_cache=from_cache,
            )
        return SnapshotResponse(
            status=200,
            etag=etag,
            cache_control=self._settings.cache_control,
            body=body,
            from_cache=from_cache,
        )

    def _schedule_put(self, key: str, body: str) -> None:
        task = asyncio.create_task(self._put(key, body))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _put(self, key: str, body: str) -> None:
        try:
            await self._cache.put(key, body, self._settings.snapshot_cache_ttl)
        except Exception as e:  # noqa
            logger.warning(f"snapshot cache write failed (non-critical): {e}", extra={"cache_key": key})

    async def drain(self) -> None:
        """wait for in-flight cache writes, used on shutdown and in tests."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
