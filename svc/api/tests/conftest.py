"""shared fixtures for api service tests."""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from figstore.postgres.models import Base
from figstore.postgres.session import session_scope
from figstore.redis.client import RedisClient

from apisvc.admin import AdminService
from apisvc.config import ApiSettings
from apisvc.public.cache import MemorySnapshotCache
from apisvc.public.invalidator import Invalidator
from apisvc.public.service import PublicService
from apisvc.repository import (
    ProjectRepository,
    EnvironmentRepository,
    FlagRepository,
    ConfigRepository,
)


@pytest.fixture
def api_settings():
    """api settings using the in-process snapshot cache"""
    return ApiSettings(
        snapshot_cache_backend="memory",
        snapshot_cache_ttl=60,
        snapshot_max_age=5,
        snapshot_stale_while_revalidate=60,
        snapshot_memory_maxsize=100,
    )


@pytest.fixture
def memory_cache(api_settings):
    return MemorySnapshotCache(
        maxsize=api_settings.snapshot_memory_maxsize,
        ttl=api_settings.snapshot_cache_ttl,
    )


@pytest.fixture
def mock_redis_client():
    """mocked redis client"""
    mock = AsyncMock(spec=RedisClient)
    mock.get_snapshot = AsyncMock(return_value=None)
    mock.set_snapshot = AsyncMock()
    mock.delete_snapshot = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """file-backed sqlite so concurrent sessions see the same database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'figflag.db'}",
        echo=False,
    )
    async with engine.begin() as conn:  # noqa
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def acme(session_factory):
    """project acme/prod with one flag and one config, plus other/staging."""
    async with session_scope(session_factory) as session:
        acme = await ProjectRepository(session).create(
            name="Acme", slug="acme", project_id="proj_acme"
        )
        prod = await EnvironmentRepository(session).create(
            project_id=acme.id, name="Production", slug="prod", environment_id="env_prod"
        )
        await FlagRepository(session).upsert(prod, "new_ui", enabled=True)
        await ConfigRepository(session).upsert(prod, "theme", '{"color":"blue"}')

        other = await ProjectRepository(session).create(
            name="Other", slug="other", project_id="proj_other"
        )
        await EnvironmentRepository(session).create(
            project_id=other.id, name="Staging", slug="staging", environment_id="env_other_staging"
        )
    return {"project_id": "proj_acme", "environment_id": "env_prod"}


@pytest.fixture
def public_service(api_settings, memory_cache, session_factory):
    return PublicService(api_settings, memory_cache, session_factory)


@pytest.fixture
def invalidator(api_settings, memory_cache):
    return Invalidator(memory_cache, key_prefix=api_settings.snapshot_key_prefix)


@pytest.fixture
def admin_service(session_factory, invalidator):
    return AdminService(session_factory, invalidator)
