import warnings
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from figstore.config import PostgresSettings, RedisSettings


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    http_host: str = "0.0.0.0"
    http_port: int = 8080

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "figflag"
    postgres_password: str = "figflag"
    postgres_database: str = "figflag"

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0

    snapshot_cache_backend: Literal["redis", "memory"] = "redis"
    snapshot_cache_ttl: int = 60  # seconds
    snapshot_max_age: int = 5  # seconds
    snapshot_stale_while_revalidate: int = 60  # seconds
    snapshot_memory_maxsize: int = 1000
    snapshot_key_prefix: str = "public"

    etag_length: int = 16

    cors_allow_origins: list[str] = ["*"]

    @model_validator(mode="after")
    def validate_freshness(self):
        if self.snapshot_max_age > self.snapshot_cache_ttl:
            warnings.warn(
                "snapshot_max_age > snapshot_cache_ttl lets clients hold a snapshot "
                "longer than the server-side cache does"
            )
        return self

    @property
    def cache_control(self) -> str:
        return (
            f"public, max-age={self.snapshot_max_age}, "
            f"stale-while-revalidate={self.snapshot_stale_while_revalidate}"
        )

    def postgres_settings(self) -> PostgresSettings:
        return PostgresSettings(
            host=self.postgres_host,
            port=self.postgres_port,
            user=self.postgres_user,
            password=self.postgres_password,
            database=self.postgres_database
        )

    def redis_settings(self) -> RedisSettings:
        return RedisSettings(
            host=self.redis_host,
            port=self.redis_port,
            password=self.redis_password,
            db=self.redis_db
        )


settings = ApiSettings()
