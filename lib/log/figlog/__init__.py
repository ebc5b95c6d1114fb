from figlog.config import configure_logging
from figlog.context import request_context
from figlog.context import snapshot_scope
from figlog.context import get_request_id
from figlog.context import get_scope

__all__ = [
    "configure_logging",
    "request_context",
    "snapshot_scope",
    "get_request_id",
    "get_scope",
]
