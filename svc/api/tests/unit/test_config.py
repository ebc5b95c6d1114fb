import pytest

from apisvc.config import ApiSettings


class TestApiSettingsDefaults:
    """test default configuration values."""

    def test_default_snapshot_freshness(self):
        settings = ApiSettings()

        assert settings.snapshot_cache_ttl == 60
        assert settings.snapshot_max_age == 5
        assert settings.snapshot_stale_while_revalidate == 60

    def test_default_cache_backend(self):
        settings = ApiSettings()

        assert settings.snapshot_cache_backend == "redis"
        assert settings.snapshot_key_prefix == "public"

    def test_default_etag_length(self):
        settings = ApiSettings()

        assert settings.etag_length == 16

    def test_default_http_settings(self):
        settings = ApiSettings()

        assert settings.http_host == "0.0.0.0"
        assert settings.http_port == 8080


class TestApiSettingsDerived:
    def test_cache_control_header(self):
        settings = ApiSettings(snapshot_max_age=5, snapshot_stale_while_revalidate=60)

        assert settings.cache_control == "public, max-age=5, stale-while-revalidate=60"

    def test_redis_settings_without_password(self):
        settings = ApiSettings(redis_host="localhost", redis_port=6379, redis_db=0)

        assert settings.redis_settings().url == "redis://localhost:6379/0"

    def test_redis_settings_with_password(self):
        settings = ApiSettings(
            redis_host="redis.example.com",
            redis_port=6380,
            redis_password="mypassword",
            redis_db=2
        )

        assert settings.redis_settings().url == "redis://:mypassword@redis.example.com:6380/2"

    def test_postgres_settings(self):
        settings = ApiSettings(
            postgres_host="db",
            postgres_port=5433,
            postgres_user="u",
            postgres_password="p",
            postgres_database="flags"
        )

        assert settings.postgres_settings().dsn == "postgresql+asyncpg://u:p@db:5433/flags"

    def test_max_age_above_ttl_warns(self):
        with pytest.warns(UserWarning, match="snapshot_max_age"):
            ApiSettings(snapshot_cache_ttl=10, snapshot_max_age=30)


class TestApiSettingsEnvironmentVariables:
    def test_load_freshness_from_env(self, monkeypatch):
        monkeypatch.setenv("API_SNAPSHOT_CACHE_TTL", "120")
        monkeypatch.setenv("API_SNAPSHOT_MAX_AGE", "10")
        monkeypatch.setenv("API_SNAPSHOT_STALE_WHILE_REVALIDATE", "30")

        settings = ApiSettings()

        assert settings.snapshot_cache_ttl == 120
        assert settings.snapshot_max_age == 10
        assert settings.snapshot_stale_while_revalidate == 30

    def test_load_cache_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("API_SNAPSHOT_CACHE_BACKEND", "memory")

        settings = ApiSettings()

        assert settings.snapshot_cache_backend == "memory"

    def test_env_prefix_is_api(self, monkeypatch):
        monkeypatch.setenv("SNAPSHOT_CACHE_TTL", "7")
        monkeypatch.setenv("API_SNAPSHOT_CACHE_TTL", "90")

        settings = ApiSettings()

        assert settings.snapshot_cache_ttl == 90
