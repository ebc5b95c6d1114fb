from unittest.mock import AsyncMock, patch

import pytest

from apisvc.service import ApiService


class TestApiService:
    @pytest.mark.asyncio
    async def test_wire_shares_one_cache(self, api_settings, memory_cache, session_factory, acme):
        service = ApiService(api_settings)
        service.wire(session_factory, memory_cache)

        await service.public.resolve("acme", "prod")
        await service.public.drain()
        assert await memory_cache.get("public:acme:prod") is not None

        await service.admin.upsert_flag("acme", "prod", "new_ui", enabled=False)

        assert await memory_cache.get("public:acme:prod") is None

    @pytest.mark.asyncio
    async def test_stop_drains_and_closes(self, api_settings, session_factory):
        cache = AsyncMock()
        service = ApiService(api_settings)
        service.wire(session_factory, cache)

        with patch("apisvc.service.dispose_db", new=AsyncMock()) as dispose:
            await service.stop()

        cache.close.assert_awaited_once()
        dispose.assert_awaited_once()
