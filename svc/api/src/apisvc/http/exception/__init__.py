from apisvc.http.exception.base import BaseAPIException
from apisvc.http.exception.base import BadRequestException
from apisvc.http.exception.base import NotFoundException
from apisvc.http.exception.base import ConflictException
from apisvc.http.exception.base import InternalServerException
from apisvc.http.exception.base import ServiceUnavailableException
from apisvc.http.exception.base import ProjectNotFoundException
from apisvc.http.exception.base import EnvironmentNotFoundException
from apisvc.http.exception.base import FlagNotFoundException
from apisvc.http.exception.base import ConfigNotFoundException
from apisvc.http.exception.base import SlugAlreadyExistsException
from apisvc.http.exception.base import EnvironmentNotEmptyException
from apisvc.http.exception.base import StoreUnavailableException

__all__ = [
    "BaseAPIException",
    "BadRequestException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
    "ServiceUnavailableException",
    "ProjectNotFoundException",
    "EnvironmentNotFoundException",
    "FlagNotFoundException",
    "ConfigNotFoundException",
    "SlugAlreadyExistsException",
    "EnvironmentNotEmptyException",
    "StoreUnavailableException",
]
