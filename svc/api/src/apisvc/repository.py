from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from figstore.postgres.models import Project, Environment, Flag, Config


class ProjectRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        name: str,
        slug: str,
        description: str | None = None,
        project_id: str | None = None
    ) -> Project:
        project = Project(name=name, slug=slug, description=description)
        if project_id:
            project.id = project_id
        self._session.add(project)
        await self._session.flush()
        return project

    async def get_by_slug(self, slug: str) -> Project | None:
        stmt = select(Project).where(Project.slug == slug)
        response = await self._session.execute(stmt)
        return response.scalar_one_or_none()


class EnvironmentRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        project_id: str,
        name: str,
        slug: str,
        description: str | None = None,
        environment_id: str | None = None
    ) -> Environment:
        environment = Environment(
            project_id=project_id,
            name=name,
            slug=slug,
            description=description
        )
        if environment_id:
            environment.id = environment_id
        self._session.add(environment)
        await self._session.flush()
        return environment

    async def get(self, environment_id: str) -> Environment | None:
        """get environment by id with its project loaded."""
        stmt = (
            select(Environment)
            .options(selectinload(Environment.project))
            .where(Environment.id == environment_id)
        )
        response = await self._session.execute(stmt)
        return response.scalar_one_or_none()

    async def get_by_slug(self, project_id: str, slug: str) -> Environment | None:
        """get environment by slug, scoped to a single project."""
        stmt = select(Environment).where(
            Environment.project_id == project_id,
            Environment.slug == slug
        )
        response = await self._session.execute(stmt)
        return response.scalar_one_or_none()

    async def delete(self, environment: Environment) -> None:
        await self._session.delete(environment)
        await self._session.flush()


class FlagRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_environment(self, environment_id: str) -> list[Flag]:
        stmt = select(Flag).where(Flag.environment_id == environment_id)
        response = await self._session.execute(stmt)
        return list(response.scalars().all())

    async def count_for_environment(self, environment_id: str) -> int:
        stmt = select(func.count()).select_from(Flag).where(Flag.environment_id == environment_id)
        response = await self._session.execute(stmt)
        return response.scalar_one()

    async def get_by_key(self, environment_id: str, key: str) -> Flag | None:
        stmt = select(Flag).where(
            Flag.environment_id == environment_id,
            Flag.key == key
        )
        response = await self._session.execute(stmt)
        return response.scalar_one_or_none()

    async def upsert(self, environment: Environment, key: str, **fields) -> Flag:
        """create the flag or update the given fields in place; None fields are ignored."""
        flag = await self.get_by_key(environment.id, key)
        if flag is None:
            flag = Flag(
                project_id=environment.project_id,
                environment_id=environment.id,
                key=key,
                name=fields.get("name") or key,
                enabled=False
            )
            self._session.add(flag)

        for name, value in fields.items():
            if hasattr(flag, name) and value is not None:
                setattr(flag, name, value)

        await self._session.flush()
        return flag

    async def delete(self, environment_id: str, key: str) -> bool:
        flag = await self.get_by_key(environment_id, key)
        if flag is None:
            return False
        await self._session.delete(flag)
        await self._session.flush()
        return True


class ConfigRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_environment(self, environment_id: str) -> list[Config]:
        stmt = select(Config).where(Config.environment_id == environment_id)
        response = await self._session.execute(stmt)
        return list(response.scalars().all())

    async def count_for_environment(self, environment_id: str) -> int:
        stmt = select(func.count()).select_from(Config).where(Config.environment_id == environment_id)
        response = await self._session.execute(stmt)
        return response.scalar_one()

    async def get_by_key(self, environment_id: str, key: str) -> Config | None:
        stmt = select(Config).where(
            Config.environment_id == environment_id,
            Config.key == key
        )
        response = await self._session.execute(stmt)
        return response.scalar_one_or_none()

    async def upsert(
        self,
        environment: Environment,
        key: str,
        value: str | None,
        **fields
    ) -> Config:
        """create the config or overwrite its stored value.

        `value` is written verbatim (including None), other fields only when given.
        """
        config = await self.get_by_key(environment.id, key)
        if config is None:
            config = Config(
                project_id=environment.project_id,
                environment_id=environment.id,
                key=key,
                name=fields.get("name") or key
            )
            self._session.add(config)

        config.value = value
        for name, field_value in fields.items():
            if hasattr(config, name) and field_value is not None:
                setattr(config, name, field_value)

        await self._session.flush()
        return config

    async def delete(self, environment_id: str, key: str) -> bool:
        config = await self.get_by_key(environment_id, key)
        if config is None:
            return False
        await self._session.delete(config)
        await self._session.flush()
        return True
