import logging
from typing import Optional

from fastapi import APIRouter
from fastapi import Header
from fastapi import Response

from apisvc.http.exception.mapping import to_api_exception
from apisvc.public.errors import SnapshotError
from apisvc.public.service import PublicService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public", tags=["public"])

# module-level public service instance, set via set_public_service()
_public_service: Optional[PublicService] = None


def set_public_service(service: PublicService) -> None:
    global _public_service
    _public_service = service


def get_public_service() -> PublicService:
    if _public_service is None:
        raise RuntimeError("public service not initialized")
    return _public_service


@router.get(
    "/{project_slug}/{environment}",
    responses={
        200: {"description": "flag/config snapshot"},
        304: {"description": "snapshot unchanged since the given etag"},
        404: {"description": "project_not_found or environment_not_found"},
    },
)
async def get_public_snapshot(
    project_slug: str,
    environment: str,
    if_none_match: Optional[str] = Header(default=None),
):
    """flags and configs for one environment, served from cache when possible."""
    service = get_public_service()
    try:
        result = await service.resolve(project_slug, environment, if_none_match)
    except SnapshotError as e:
        raise to_api_exception(e)

    headers = {"Cache-Control": result.cache_control, "ETag": result.etag}
    if result.not_modified:
        return Response(status_code=304, headers=headers)

    # body is returned byte-for-byte so the etag stays valid
    return Response(
        content=result.body,
        status_code=200,
        media_type="application/json",
        headers=headers,
    )
