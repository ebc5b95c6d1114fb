from apisvc.public.errors import (
    EnvironmentNotEmptyError,
    EnvironmentNotFoundError,
    InvalidConfigValueError,
    ProjectNotFoundError,
    SlugConflictError,
    SnapshotError,
    UpstreamStoreError,
)
from apisvc.http.exception.base import (
    BadRequestException,
    BaseAPIException,
    EnvironmentNotEmptyException,
    EnvironmentNotFoundException,
    InternalServerException,
    ProjectNotFoundException,
    SlugAlreadyExistsException,
    StoreUnavailableException,
)


def to_api_exception(error: SnapshotError) -> BaseAPIException:
    """translate a domain error into the http error returned to clients."""
    if isinstance(error, ProjectNotFoundError):
        return ProjectNotFoundException(str(error))
    if isinstance(error, EnvironmentNotFoundError):
        return EnvironmentNotFoundException(str(error))
    if isinstance(error, SlugConflictError):
        return SlugAlreadyExistsException(str(error))
    if isinstance(error, EnvironmentNotEmptyError):
        return EnvironmentNotEmptyException(str(error), flags=error.flags, configs=error.configs)
    if isinstance(error, InvalidConfigValueError):
        return BadRequestException(str(error))
    if isinstance(error, UpstreamStoreError):
        return StoreUnavailableException(str(error))
    return InternalServerException(str(error))
