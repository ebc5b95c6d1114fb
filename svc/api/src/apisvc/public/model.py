from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class PublicSnapshot(BaseModel):
    """the document served at /public/{project}/{environment}.

    field order is the wire order; it is part of what the etag covers.
    """

    model_config = ConfigDict(frozen=True)

    project: str
    environment: str
    flags: Dict[str, bool] = Field(default_factory=dict)
    configs: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime

    def serialize(self) -> str:
        return self.model_dump_json()


@dataclass(frozen=True)
class SnapshotResponse:
    status: int
    etag: str
    cache_control: str
    body: str | None = None
    from_cache: bool = False

    @property
    def not_modified(self) -> bool:
        return self.status == 304
