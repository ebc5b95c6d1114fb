import pytest
from unittest.mock import AsyncMock

from apisvc.public.cache import SnapshotCache
from apisvc.public.errors import CacheUnavailableError
from apisvc.public.invalidator import Invalidator


@pytest.fixture
def mock_cache():
    return AsyncMock(spec=SnapshotCache)


class TestInvalidator:
    @pytest.mark.asyncio
    async def test_deletes_derived_key(self, mock_cache):
        invalidator = Invalidator(mock_cache)

        result = await invalidator.invalidate("acme", "prod")

        assert result is True
        mock_cache.delete.assert_awaited_once_with("public:acme:prod")

    @pytest.mark.asyncio
    async def test_uses_configured_prefix(self, mock_cache):
        invalidator = Invalidator(mock_cache, key_prefix="edge")

        await invalidator.invalidate("acme", "prod")

        mock_cache.delete.assert_awaited_once_with("edge:acme:prod")

    @pytest.mark.asyncio
    async def test_sanitizes_slugs_like_the_read_path(self, mock_cache):
        invalidator = Invalidator(mock_cache)

        await invalidator.invalidate("a:b", "c d")

        mock_cache.delete.assert_awaited_once_with("public:a_b:c_d")

    @pytest.mark.asyncio
    async def test_backend_failure_is_swallowed(self, mock_cache):
        mock_cache.delete.side_effect = CacheUnavailableError("redis down")
        invalidator = Invalidator(mock_cache)

        # should not raise exception
        result = await invalidator.invalidate("acme", "prod")

        assert result is False

    @pytest.mark.asyncio
    async def test_removes_entry_from_memory_cache(self, memory_cache):
        await memory_cache.put("public:acme:prod", "stale", ttl=60)
        invalidator = Invalidator(memory_cache)

        await invalidator.invalidate("acme", "prod")

        assert await memory_cache.get("public:acme:prod") is None
