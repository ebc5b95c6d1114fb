import re

DEFAULT_PREFIX = "public"

# ":" is the key separator and never survives sanitizing
_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_component(value: str) -> str:
    return _UNSAFE.sub("_", value)


def derive_cache_key(
    project_slug: str,
    environment_slug: str,
    prefix: str = DEFAULT_PREFIX
) -> str:
    """canonical cache key for a (project, environment) snapshot.

    any character outside [A-Za-z0-9_-] is replaced by "_", so neither
    component can contain the ":" separator and no slug can forge a key
    belonging to another pair.
    """
    return f"{prefix}:{sanitize_component(project_slug)}:{sanitize_component(environment_slug)}"
