import redis.asyncio as redis

from figstore.config import RedisSettings


class RedisClient:
    """thin async wrapper holding the connection for snapshot storage.

    values are stored as the exact serialized text handed in; callers own
    key derivation and (de)serialization.
    """

    def __init__(self, settings: RedisSettings | None = None):
        if settings is None:
            settings = RedisSettings()
        self._settings = settings
        self._client: redis.Redis | None = None

    async def connect(self) -> None:
        self._client = redis.from_url(
            self._settings.url,
            decode_responses=True,
            socket_timeout=self._settings.socket_timeout,
            socket_connect_timeout=self._settings.socket_timeout,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise RuntimeError("Redis client not connected. Call connect() first.")
        return self._client

    async def get_snapshot(self, key: str) -> str | None:
        return await self.client.get(key)

    async def set_snapshot(self, key: str, body: str, ttl: int | None = None) -> None:
        await self.client.set(key, body, ex=ttl)

    async def delete_snapshot(self, key: str) -> None:
        await self.client.delete(key)
