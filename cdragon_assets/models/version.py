"""Persisted crawl state."""

from pydantic import Field

from ..core.helpers import utc_now_iso
from .base import AssetModel


class VersionMarker(AssetModel):
    """Upstream content version seen by the last crawl, stored as ``version.json``."""

    version: str
    crawled_at: str = Field(default_factory=utc_now_iso)

    def to_json(self):
        return self.model_dump(by_alias=True, mode="json")
