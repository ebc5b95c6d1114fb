from __future__ import annotations

import logging

from apisvc.public.cache import SnapshotCache
from apisvc.public.errors import CacheUnavailableError
from apisvc.public.key import DEFAULT_PREFIX, derive_cache_key

logger = logging.getLogger(__name__)


class Invalidator:
    """drops the cached snapshot of an environment after a committed write.

    must only be awaited once the record store commit has returned;
    otherwise a concurrent reader could repopulate from pre-write rows.
    a failed delete is logged and swallowed, the entry still expires at ttl.
    """

    def __init__(self, cache: SnapshotCache, key_prefix: str = DEFAULT_PREFIX):
        self._cache = cache
        self._key_prefix = key_prefix

    async def invalidate(self, project_slug: str, environment_slug: str) -> bool:
        key = derive_cache_key(project_slug, environment_slug, self._key_prefix)
        try:
            await self._cache.delete(key)
        except CacheUnavailableError as e:
            logger.warning(
                f"snapshot invalidation failed, entry will expire at ttl: {e}",
                extra={"cache_key": key},
            )
            return False

        logger.debug("snapshot invalidated", extra={"cache_key": key})
        return True
