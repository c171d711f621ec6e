"""Typed access to the CommunityDragon content mirror."""

import logging
from typing import Any, Tuple

from ..core.constants import CDRAGON_URL, CONTENT_METADATA_PATH, GAME_DATA_PLUGIN, ResourcePath
from ..core.exceptions import FetchFailure, HTTPFetchError
from ..models.resources import parse_resource
from .fetch_client import FetchClient

logger = logging.getLogger(__name__)


class CDragonClient:
    """Fetches catalog resources for one patch and locale.

    Catalog resources fall back to ``fallback_locale`` when the primary locale
    request fails; retries of a single URL are left to the ``FetchClient``.
    """

    def __init__(
        self,
        fetch_client: FetchClient,
        patch: str = "pbe",
        locale: str = "default",
        fallback_locale: str = "default",
        base_host: str = CDRAGON_URL,
    ):
        self.fetch_client = fetch_client
        self.patch = patch
        self.locale = locale
        self.fallback_locale = fallback_locale
        self.base_host = base_host.rstrip("/")

    @property
    def base_url(self) -> str:
        return f"{self.base_host}/{self.patch}"

    def with_locale(self, locale: str) -> "CDragonClient":
        """Return a client for another locale sharing the same HTTP session."""
        return CDragonClient(
            self.fetch_client,
            patch=self.patch,
            locale=locale,
            fallback_locale=self.fallback_locale,
            base_host=self.base_host,
        )

    def asset_urls(self, path: ResourcePath) -> Tuple[str, str]:
        """Primary and fallback URLs for a catalog resource."""
        root = f"{self.base_url}/{GAME_DATA_PLUGIN}"
        return (
            f"{root}/{self.locale}/{path.value}",
            f"{root}/{self.fallback_locale}/{path.value}",
        )

    async def fetch_collection(self, path: ResourcePath) -> Any:
        """Fetch a catalog resource and validate it into its record type."""
        url, fallback_url = self.asset_urls(path)
        try:
            payload = await self.fetch_client.get_json(url)
        except HTTPFetchError as e:
            logger.warning(
                f"{path.value} unavailable for {self.locale} ({e}); "
                f"falling back to {self.fallback_locale}"
            )
            try:
                payload = await self.fetch_client.get_json(fallback_url)
            except HTTPFetchError as fallback_error:
                raise FetchFailure(
                    path.value, [url, fallback_url], fallback_error
                ) from fallback_error

        return parse_resource(path, payload)

    async def fetch_scalar(self, path: str) -> Any:
        """Fetch a locale-independent document such as ``content-metadata.json``."""
        url = f"{self.base_url}/{path}"
        try:
            payload = await self.fetch_client.get_json(url)
        except HTTPFetchError as e:
            raise FetchFailure(path, [url], e) from e
        return payload

    async def fetch_version(self) -> str:
        """Current upstream content version string."""
        metadata = await self.fetch_scalar(CONTENT_METADATA_PATH)
        try:
            return str(metadata["version"])
        except (KeyError, TypeError) as e:
            raise FetchFailure(
                CONTENT_METADATA_PATH, [f"{self.base_url}/{CONTENT_METADATA_PATH}"], e
            ) from e
