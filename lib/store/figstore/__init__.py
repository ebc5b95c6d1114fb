from figstore.postgres.models import Project, Environment, Flag, Config
from figstore.postgres.session import init_db, create_tables, session_scope
from figstore.redis.client import RedisClient
from figstore.config import PostgresSettings, RedisSettings

__all__ = [
    # Postgres models
    "Project",
    "Environment",
    "Flag",
    "Config",
    # Postgres session
    "init_db",
    "create_tables",
    "session_scope",
    # Redis
    "RedisClient",
    # Config
    "PostgresSettings",
    "RedisSettings",
]
