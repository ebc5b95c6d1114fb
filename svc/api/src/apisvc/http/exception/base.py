from __future__ import annotations

from typing import Any


class BaseAPIException(Exception):
    """
    base exception for all api errors.

    subclasses should define:
        status_code: int - http status code
        error: str - machine readable code returned to clients
        detail: str - default human readable message, used for logging

    instances can override detail with a custom message.
    """

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "internal server error"

    def __init__(self, detail: str | None = None, context: dict[str, Any] | None = None):
        self.detail = detail or self.__class__.detail
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        response: dict[str, Any] = {"error": self.error}
        if self.context:
            response["context"] = self.context
        return response


# 4xx client errors


class BadRequestException(BaseAPIException):
    status_code = 400
    error = "bad_request"
    detail = "bad request"


class NotFoundException(BaseAPIException):
    status_code = 404
    error = "not_found"
    detail = "resource not found"


class ConflictException(BaseAPIException):
    status_code = 409
    error = "conflict"
    detail = "resource conflict"


# 5xx server errors


class InternalServerException(BaseAPIException):
    status_code = 500
    error = "internal_error"
    detail = "internal server error"


class ServiceUnavailableException(BaseAPIException):
    """503 service unavailable - downstream service failure."""

    status_code = 503
    error = "service_unavailable"
    detail = "service unavailable"


# domain-specific exceptions


class ProjectNotFoundException(NotFoundException):
    error = "project_not_found"
    detail = "project not found"


class EnvironmentNotFoundException(NotFoundException):
    error = "environment_not_found"
    detail = "environment not found"


class FlagNotFoundException(NotFoundException):
    error = "flag_not_found"
    detail = "flag not found"


class ConfigNotFoundException(NotFoundException):
    error = "config_not_found"
    detail = "config not found"


class SlugAlreadyExistsException(ConflictException):
    error = "slug_already_exists"
    detail = "slug already exists"


class StoreUnavailableException(ServiceUnavailableException):
    """record store unreachable while building a response."""

    error = "store_unavailable"
    detail = "record store unavailable"


class EnvironmentNotEmptyException(ConflictException):
    error = "cannot_delete_environment_with_flags_or_configs"
    detail = "environment still has flags or configs"

    def __init__(self, detail: str | None = None, flags: int = 0, configs: int = 0):
        super().__init__(detail)
        self.flags = flags
        self.configs = configs

    def to_dict(self) -> dict[str, Any]:
        response = super().to_dict()
        response["flags"] = self.flags
        response["configs"] = self.configs
        return response
