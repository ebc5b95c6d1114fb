from __future__ import annotations

import uuid
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Generator

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_scope: ContextVar[tuple[str, str] | None] = ContextVar("scope", default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def get_scope() -> tuple[str, str] | None:
    """get the (project, environment) pair the current task is working on."""
    return _scope.get()


@contextmanager
def request_context(request_id: str | None = None) -> Generator[str, None, None]:
    """bind a request id for every log line emitted inside the block.

    a new id is generated when none is given (e.g. no X-Request-ID header).
    the previous id is restored on exit so nested contexts unwind cleanly.
    """
    token = _request_id.set(request_id or uuid.uuid4().hex)
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


@contextmanager
def snapshot_scope(project: str, environment: str) -> Generator[None, None, None]:
    """tag log lines with the project/environment slugs being resolved."""
    token = _scope.set((project, environment))
    try:
        yield
    finally:
        _scope.reset(token)
