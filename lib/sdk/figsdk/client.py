from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

import requests

DEFAULT_BASE_URL = "https://api.figflag.com"


class FigFlagError(Exception):
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"failed to fetch flags: {status_code} {reason}")


@dataclass
class Snapshot:
    project: str
    environment: str
    flags: dict[str, bool] = field(default_factory=dict)
    configs: dict[str, Any] = field(default_factory=dict)
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Snapshot":
        return cls(
            project=data.get("project", ""),
            environment=data.get("environment", ""),
            flags=data.get("flags", {}),
            configs=data.get("configs", {}),
            timestamp=data.get("timestamp"),
        )


class FigFlagClient:
    """client for the public snapshot endpoint.

    remembers the last etag and snapshot; subsequent fetches are
    conditional and a 304 reuses the remembered snapshot.
    """

    def __init__(
        self,
        project_slug: str,
        environment: str,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = 5.0,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.project_slug = project_slug
        self.environment = environment
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[requests.Session] = None
        self._etag: str | None = None
        self._snapshot: Snapshot | None = None

    # ------------------------------------------------------------------ #
    # lifecycle
    # ------------------------------------------------------------------ #

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
            if self.api_key:
                self._session.headers.update(
                    {"Authorization": f"Bearer {self.api_key}"}
                )
        return self._session

    def close(self) -> None:
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "FigFlagClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # snapshot access
    # ------------------------------------------------------------------ #

    @property
    def url(self) -> str:
        project = quote(self.project_slug, safe="")
        environment = quote(self.environment, safe="")
        return f"{self.base_url}/public/{project}/{environment}"

    @property
    def etag(self) -> str | None:
        return self._etag

    def get_all(self) -> Snapshot:
        headers = {}
        if self._etag and self._snapshot is not None:
            headers["If-None-Match"] = self._etag

        r = self.session.get(self.url, headers=headers, timeout=self.timeout)

        if r.status_code == 304 and self._snapshot is not None:
            return self._snapshot
        if not r.ok:
            raise FigFlagError(r.status_code, r.reason)

        self._snapshot = Snapshot.from_dict(r.json())
        self._etag = r.headers.get("ETag")
        return self._snapshot

    def get_flags(self) -> dict[str, bool]:
        return self.get_all().flags

    def get_configs(self) -> dict[str, Any]:
        return self.get_all().configs

    def is_enabled(self, flag_key: str) -> bool:
        """unknown flags read as disabled."""
        return bool(self.get_flags().get(flag_key, False))

    def get_config(self, config_key: str, default: Any = None) -> Any:
        return self.get_configs().get(config_key, default)


def create_client(project_slug: str, environment: str, **kwargs) -> FigFlagClient:
    return FigFlagClient(project_slug, environment, **kwargs)
