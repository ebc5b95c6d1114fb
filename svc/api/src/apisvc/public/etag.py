from __future__ import annotations

import hashlib

DEFAULT_LENGTH = 16


def compute_etag(body: str, length: int = DEFAULT_LENGTH) -> str:
    """strong validator for the exact bytes of a serialized snapshot.

    truncated sha-256 hex, quoted.
    """
    digest = hashlib.sha256(body.encode("utf-8")).hexdigest()
    return f'"{digest[:length]}"'


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """evaluate an If-None-Match header against the current etag.

    accepts a single tag, a comma separated list, or "*". weak tags
    compare by their opaque value.
    """
    if not if_none_match:
        return False

    header = if_none_match.strip()
    if header == etag or header == "*":
        return True

    for candidate in header.split(","):
        candidate = candidate.strip()
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False
