from apisvc.public.service import PublicService
from apisvc.public.builder import SnapshotBuilder
from apisvc.public.cache import SnapshotCache, RedisSnapshotCache, MemorySnapshotCache
from apisvc.public.invalidator import Invalidator
from apisvc.public.key import derive_cache_key
from apisvc.public.etag import compute_etag
from apisvc.public.model import PublicSnapshot, SnapshotResponse

__all__ = [
    "PublicService",
    "SnapshotBuilder",
    "SnapshotCache",
    "RedisSnapshotCache",
    "MemorySnapshotCache",
    "Invalidator",
    "derive_cache_key",
    "compute_etag",
    "PublicSnapshot",
    "SnapshotResponse",
]
