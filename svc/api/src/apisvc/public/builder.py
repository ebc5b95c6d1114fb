from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from figstore.postgres.models import Environment, Flag, Config
from figstore.postgres.session import session_scope

from apisvc.public.errors import EnvironmentNotFoundError
from apisvc.public.model import PublicSnapshot
from apisvc.repository import EnvironmentRepository, FlagRepository, ConfigRepository

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard json constant: {name}")


def parse_config_value(raw: str | None) -> Any:
    """typed view of a stored config value; malformed json falls back to the raw text.

    NaN and Infinity are not json and count as malformed, as does nesting
    too deep for the decoder.
    """
    if raw is None:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        logger.debug(f"config value is not valid json, serving raw string: {raw[:64]!r}")
        return raw


class SnapshotBuilder:
    """assembles the public snapshot for one environment from the record store.

    the environment row, its flags and its configs are read concurrently,
    each on its own session, since none of the reads depends on another.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def build(self, environment_id: str) -> PublicSnapshot:
        environment, flags, configs = await asyncio.gather(
            self._load_environment(environment_id),
            self._load_flags(environment_id),
            self._load_configs(environment_id),
        )
        if environment is None:
            # deleted between slug resolution and the fetch
            raise EnvironmentNotFoundError(environment_id)

        return PublicSnapshot(
            project=environment.project.slug,
            environment=environment.slug,
            flags={flag.key: bool(flag.enabled) for flag in flags},
            configs={config.key: parse_config_value(config.value) for config in configs},
            timestamp=datetime.now(timezone.utc),
        )

    async def _load_environment(self, environment_id: str) -> Environment | None:
        async with session_scope(self._session_factory) as session:
            return await EnvironmentRepository(session).get(environment_id)

    async def _load_flags(self, environment_id: str) -> list[Flag]:
        async with session_scope(self._session_factory) as session:
            return await FlagRepository(session).list_for_environment(environment_id)

    async def _load_configs(self, environment_id: str) -> list[Config]:
        async with session_scope(self._session_factory) as session:
            return await ConfigRepository(session).list_for_environment(environment_id)
