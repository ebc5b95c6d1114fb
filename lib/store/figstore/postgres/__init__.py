from figstore.postgres.models import Base, Project, Environment, Flag, Config
from figstore.postgres.session import (
    init_db,
    create_tables,
    dispose_db,
    session_scope,
)

__all__ = [
    "Base",
    "Project",
    "Environment",
    "Flag",
    "Config",
    "init_db",
    "create_tables",
    "dispose_db",
    "session_scope",
]
