from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from figstore.postgres.models import Project, Environment, Flag, Config
from figstore.postgres.session import session_scope

from apisvc.public.errors import (
    EnvironmentNotEmptyError,
    EnvironmentNotFoundError,
    InvalidConfigValueError,
    ProjectNotFoundError,
    SlugConflictError,
)
from apisvc.public.invalidator import Invalidator
from apisvc.repository import (
    ProjectRepository,
    EnvironmentRepository,
    FlagRepository,
    ConfigRepository,
)

logger = logging.getLogger(__name__)


class AdminService:
    """write path for flags, configs and environments.

    every mutation commits first and only then invalidates the public
    snapshot of the affected environment.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        invalidator: Invalidator,
    ):
        self._session_factory = session_factory
        self._invalidator = invalidator

    async def create_project(
        self,
        name: str,
        slug: str,
        description: str | None = None,
        project_id: str | None = None,
    ) -> dict:
        try:
            async with session_scope(self._session_factory) as session:
                project = await ProjectRepository(session).create(
                    name=name, slug=slug, description=description, project_id=project_id
                )
        except IntegrityError as e:
            raise SlugConflictError(slug) from e

        logger.info(f"project created: {project.slug} ({project.id})")
        return self._project_to_dict(project)

    async def create_environment(
        self,
        project_slug: str,
        name: str,
        slug: str,
        description: str | None = None,
        environment_id: str | None = None,
    ) -> dict:
        try:
            async with session_scope(self._session_factory) as session:
                project = await self._get_project(session, project_slug)
                environment = await EnvironmentRepository(session).create(
                    project_id=project.id,
                    name=name,
                    slug=slug,
                    description=description,
                    environment_id=environment_id,
                )
        except IntegrityError as e:
            raise SlugConflictError(slug) from e

        # a fresh environment has nothing cached, but a stale entry could
        # survive from an earlier environment with the same slug
        await self._invalidator.invalidate(project_slug, environment.slug)
        logger.info(f"environment created: {project_slug}/{environment.slug}")
        return self._environment_to_dict(environment)

    async def delete_environment(self, project_slug: str, environment_slug: str) -> bool:
        async with session_scope(self._session_factory) as session:
            project = await self._get_project(session, project_slug)
            repo = EnvironmentRepository(session)
            environment = await repo.get_by_slug(project.id, environment_slug)
            if environment is None:
                return False

            flags = await FlagRepository(session).count_for_environment(environment.id)
            configs = await ConfigRepository(session).count_for_environment(environment.id)
            if flags or configs:
                raise EnvironmentNotEmptyError(environment_slug, flags, configs)
            await repo.delete(environment)

        await self._invalidator.invalidate(project_slug, environment_slug)
        logger.info(f"environment deleted: {project_slug}/{environment_slug}")
        return True

    async def upsert_flag(
        self,
        project_slug: str,
        environment_slug: str,
        key: str,
        enabled: bool,
        name: str | None = None,
        description: str | None = None,
        default_value: str | None = None,
    ) -> dict:
        async with session_scope(self._session_factory) as session:
            environment = await self._get_environment(session, project_slug, environment_slug)
            flag = await FlagRepository(session).upsert(
                environment,
                key,
                enabled=bool(enabled),
                name=name,
                description=description,
                default_value=default_value,
            )

        await self._invalidator.invalidate(project_slug, environment_slug)
        return self._flag_to_dict(flag)

    async def delete_flag(self, project_slug: str, environment_slug: str, key: str) -> bool:
        async with session_scope(self._session_factory) as session:
            environment = await self._get_environment(session, project_slug, environment_slug)
            deleted = await FlagRepository(session).delete(environment.id, key)

        if deleted:
            await self._invalidator.invalidate(project_slug, environment_slug)
        return deleted

    async def upsert_config(
        self,
        project_slug: str,
        environment_slug: str,
        key: str,
        value: Any,
        name: str | None = None,
        description: str | None = None,
        raw: bool = False,
    ) -> dict:
        """write a config value.

        `value` is stored as its json text unless `raw` is set, in which case
        a string is stored verbatim (it is then served as-is if it is not json).
        """
        if raw:
            if value is not None and not isinstance(value, str):
                raise InvalidConfigValueError(f"raw value for config {key} must be a string")
            stored = value
        else:
            try:
                stored = json.dumps(value, allow_nan=False)
            except ValueError as e:
                raise InvalidConfigValueError(f"value for config {key} is not valid json: {e}") from e

        async with session_scope(self._session_factory) as session:
            environment = await self._get_environment(session, project_slug, environment_slug)
            config = await ConfigRepository(session).upsert(
                environment, key, stored, name=name, description=description
            )

        await self._invalidator.invalidate(project_slug, environment_slug)
        return self._config_to_dict(config)

    async def delete_config(self, project_slug: str, environment_slug: str, key: str) -> bool:
        async with session_scope(self._session_factory) as session:
            environment = await self._get_environment(session, project_slug, environment_slug)
            deleted = await ConfigRepository(session).delete(environment.id, key)

        if deleted:
            await self._invalidator.invalidate(project_slug, environment_slug)
        return deleted

    @staticmethod
    async def _get_project(session: AsyncSession, project_slug: str) -> Project:
        project = await ProjectRepository(session).get_by_slug(project_slug)
        if project is None:
            raise ProjectNotFoundError(project_slug)
        return project

    async def _get_environment(
        self,
        session: AsyncSession,
        project_slug: str,
        environment_slug: str,
    ) -> Environment:
        project = await self._get_project(session, project_slug)
        environment = await EnvironmentRepository(session).get_by_slug(project.id, environment_slug)
        if environment is None:
            raise EnvironmentNotFoundError(environment_slug, project_slug)
        return environment

    @staticmethod
    def _project_to_dict(project: Project) -> dict:
        return {
            "id": project.id,
            "name": project.name,
            "slug": project.slug,
            "description": project.description,
        }

    @staticmethod
    def _environment_to_dict(environment: Environment) -> dict:
        return {
            "id": environment.id,
            "project_id": environment.project_id,
            "name": environment.name,
            "slug": environment.slug,
            "description": environment.description,
        }

    @staticmethod
    def _flag_to_dict(flag: Flag) -> dict:
        return {
            "id": flag.id,
            "environment_id": flag.environment_id,
            "key": flag.key,
            "name": flag.name,
            "description": flag.description,
            "enabled": flag.enabled,
            "default_value": flag.default_value,
        }

    @staticmethod
    def _config_to_dict(config: Config) -> dict:
        return {
            "id": config.id,
            "environment_id": config.environment_id,
            "key": config.key,
            "name": config.name,
            "description": config.description,
            "value": config.value,
        }
