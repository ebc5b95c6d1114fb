from __future__ import annotations

import logging
import os
import sys
from typing import Literal

from figlog.formatters import JSONFormatter
from figlog.formatters import TextFormatter

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_configured_services: set[str] = set()

# floor levels for library loggers that emit once per command or request
_LIBRARY_LOG_LEVELS: dict[str, int] = {
    "asyncio": logging.WARNING,
    "asyncpg": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "redis": logging.ERROR,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


def _get_log_level(service: str) -> int:
    """get log level from environment variable.

    checks SERVICE_LOG_LEVEL first (e.g., APISVC_LOG_LEVEL),
    then falls back to LOG_LEVEL, then defaults to INFO.
    """
    service_env = f"{service.upper()}_LOG_LEVEL"
    level_str = os.environ.get(service_env) or os.environ.get("LOG_LEVEL", "INFO")
    return getattr(logging, level_str.upper(), logging.INFO)


def _quiet_libraries(service_level: int) -> None:
    """hold chatty library loggers above the service level.

    a service running at DEBUG also sees library output at DEBUG, except
    for the per-request access log.
    """
    for name, library_level in _LIBRARY_LOG_LEVELS.items():
        if service_level <= logging.DEBUG and name != "uvicorn.access":
            logging.getLogger(name).setLevel(logging.DEBUG)
        else:
            logging.getLogger(name).setLevel(max(library_level, service_level))


def _get_log_format() -> LogFormat:
    fmt = os.environ.get("LOG_FORMAT", "text").lower()
    return "json" if fmt == "json" else "text"


def configure_logging(
    service: str,
    level: LogLevel | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """configure root logging for a service, once per process.

    args:
        service: service name stamped on every record (e.g., "apisvc")
        level: log level override. if not provided, reads from env var.
        log_format: format override. if not provided, reads from env var.

    environment variables:
        {SERVICE}_LOG_LEVEL: service-specific log level (e.g., APISVC_LOG_LEVEL)
        LOG_LEVEL: fallback log level for all services
        LOG_FORMAT: "json" for structured logging, "text" for development
    """
    if service in _configured_services:
        return

    log_level = getattr(logging, level, None) if level else _get_log_level(service)
    fmt = log_format or _get_log_format()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if fmt == "json":
        handler.setFormatter(JSONFormatter(service))
    else:
        handler.setFormatter(TextFormatter(service))

    root_logger.addHandler(handler)

    _quiet_libraries(log_level)

    _configured_services.add(service)
