class SnapshotError(Exception):
    """base for errors raised by the snapshot read/write paths."""


class NotFoundError(SnapshotError):
    pass


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_slug: str):
        self.project_slug = project_slug
        super().__init__(f"project not found: {project_slug}")


class EnvironmentNotFoundError(NotFoundError):
    def __init__(self, environment: str, project_slug: str | None = None):
        self.environment = environment
        self.project_slug = project_slug
        scope = f"{project_slug}/{environment}" if project_slug else environment
        super().__init__(f"environment not found: {scope}")


class SlugConflictError(SnapshotError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"slug already exists: {slug}")


class CacheUnavailableError(SnapshotError):
    """cache backend could not be reached or timed out."""


class UpstreamStoreError(SnapshotError):
    """record store failed on a read the response depends on."""


class InvalidConfigValueError(SnapshotError):
    """config write rejected before reaching the record store."""


class EnvironmentNotEmptyError(SnapshotError):
    def __init__(self, environment: str, flags: int, configs: int):
        self.environment = environment
        self.flags = flags
        self.configs = configs
        super().__init__(
            f"environment {environment} still has {flags} flags and {configs} configs"
        )
