import logging
from typing import Any
from typing import Optional

from fastapi import APIRouter
from fastapi import status
from pydantic import BaseModel

from apisvc.admin import AdminService
from apisvc.http.exception import ConfigNotFoundException
from apisvc.http.exception import EnvironmentNotFoundException
from apisvc.http.exception import FlagNotFoundException
from apisvc.http.exception.mapping import to_api_exception
from apisvc.public.errors import SnapshotError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/projects", tags=["admin"])

# module-level admin service instance, set via set_admin_service()
_admin_service: Optional[AdminService] = None


def set_admin_service(service: AdminService) -> None:
    global _admin_service
    _admin_service = service


def get_admin_service() -> AdminService:
    if _admin_service is None:
        raise RuntimeError("admin service not initialized")
    return _admin_service


class ProjectRequest(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    id: Optional[str] = None


class EnvironmentRequest(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    id: Optional[str] = None


class FlagRequest(BaseModel):
    enabled: bool = False
    name: Optional[str] = None
    description: Optional[str] = None
    default_value: Optional[str] = None


class ConfigRequest(BaseModel):
    value: Any = None
    name: Optional[str] = None
    description: Optional[str] = None
    raw: bool = False


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(body: ProjectRequest):
    service = get_admin_service()
    try:
        project = await service.create_project(
            name=body.name, slug=body.slug, description=body.description, project_id=body.id
        )
    except SnapshotError as e:
        raise to_api_exception(e)
    return {"project": project}


@router.post("/{project_slug}/environments", status_code=status.HTTP_201_CREATED)
async def create_environment(project_slug: str, body: EnvironmentRequest):
    service = get_admin_service()
    try:
        environment = await service.create_environment(
            project_slug,
            name=body.name,
            slug=body.slug,
            description=body.description,
            environment_id=body.id,
        )
    except SnapshotError as e:
        raise to_api_exception(e)
    return {"environment": environment}


@router.delete("/{project_slug}/environments/{environment}")
async def delete_environment(project_slug: str, environment: str):
    service = get_admin_service()
    try:
        deleted = await service.delete_environment(project_slug, environment)
    except SnapshotError as e:
        raise to_api_exception(e)
    if not deleted:
        raise EnvironmentNotFoundException(f"environment not found: {project_slug}/{environment}")
    return {"success": True}


@router.put("/{project_slug}/environments/{environment}/flags/{key}")
async def put_flag(project_slug: str, environment: str, key: str, body: FlagRequest):
    service = get_admin_service()
    try:
        flag = await service.upsert_flag(
            project_slug,
            environment,
            key,
            enabled=body.enabled,
            name=body.name,
            description=body.description,
            default_value=body.default_value,
        )
    except SnapshotError as e:
        raise to_api_exception(e)
    logger.info(f"flag {key} set to {body.enabled} in {project_slug}/{environment}")
    return {"flag": flag}


@router.delete("/{project_slug}/environments/{environment}/flags/{key}")
async def delete_flag(project_slug: str, environment: str, key: str):
    service = get_admin_service()
    try:
        deleted = await service.delete_flag(project_slug, environment, key)
    except SnapshotError as e:
        raise to_api_exception(e)
    if not deleted:
        raise FlagNotFoundException(f"flag not found: {key}")
    return {"success": True}


@router.put("/{project_slug}/environments/{environment}/configs/{key}")
async def put_config(project_slug: str, environment: str, key: str, body: ConfigRequest):
    service = get_admin_service()
    try:
        config = await service.upsert_config(
            project_slug,
            environment,
            key,
            body.value,
            name=body.name,
            description=body.description,
            raw=body.raw,
        )
    except SnapshotError as e:
        raise to_api_exception(e)
    logger.info(f"config {key} updated in {project_slug}/{environment}")
    return {"config": config}


@router.delete("/{project_slug}/environments/{environment}/configs/{key}")
async def delete_config(project_slug: str, environment: str, key: str):
    service = get_admin_service()
    try:
        deleted = await service.delete_config(project_slug, environment, key)
    except SnapshotError as e:
        raise to_api_exception(e)
    if not deleted:
        raise ConfigNotFoundException(f"config not found: {key}")
    return {"success": True}
