"""Local JSON tree storage for crawl output."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Set, Union

from pydantic import ValidationError

from ..core.constants import VERSION_FILE
from ..core.exceptions import PersistenceFailure
from ..models.version import VersionMarker

logger = logging.getLogger(__name__)


def _load_json(file_path: Path) -> Optional[Any]:
    if not file_path.exists():
        return None
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


class DirectoryCache:
    """Directories already ensured during one run.

    Only remembers successful ``mkdir`` calls; ``mkdir(exist_ok=True)`` keeps
    concurrent check-then-create races harmless.
    """

    def __init__(self) -> None:
        self._known: Set[Path] = set()

    def __contains__(self, path: Path) -> bool:
        return path in self._known

    def __len__(self) -> int:
        return len(self._known)

    def ensure(self, path: Path) -> None:
        if path in self._known:
            return
        path.mkdir(parents=True, exist_ok=True)
        self._known.add(path)


class AssetStorage:
    """Reads and writes JSON documents below ``base_path``.

    Layout::

        base_path/
            version.json
            wiki-skin-data.json
            {locale}/
                {category}.json
                {category}/{key}.json
    """

    def __init__(self, base_path: Union[str, Path], dir_cache: Optional[DirectoryCache] = None):
        self.base_path = Path(base_path)
        self.dir_cache = dir_cache if dir_cache is not None else DirectoryCache()

    def for_locale(self, locale: str) -> "AssetStorage":
        """Storage rooted at the locale subdirectory, sharing this run's directory cache."""
        return AssetStorage(self.base_path / locale, self.dir_cache)

    def path_for(self, relative_path: str) -> Path:
        return self.base_path / relative_path

    async def write_json(self, relative_path: str, data: Any) -> Path:
        """Write ``data`` as pretty-printed UTF-8 JSON.

        The file system work runs in a worker thread so concurrent writers and
        in-flight fetches keep making progress.
        """
        file_path = self.path_for(relative_path)
        try:
            await asyncio.to_thread(self._write_json_sync, file_path, data)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceFailure(str(file_path), f"Failed to write ({e})") from e

        logger.debug(f"Saved {file_path}")
        return file_path

    def _write_json_sync(self, file_path: Path, data: Any) -> None:
        self.dir_cache.ensure(file_path.parent)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    async def write_text(self, relative_path: str, text: str) -> Path:
        file_path = self.path_for(relative_path)
        try:
            await asyncio.to_thread(self._write_text_sync, file_path, text)
        except OSError as e:
            raise PersistenceFailure(str(file_path), f"Failed to write ({e})") from e
        return file_path

    def _write_text_sync(self, file_path: Path, text: str) -> None:
        self.dir_cache.ensure(file_path.parent)
        file_path.write_text(text, encoding="utf-8")

    async def read_json(self, relative_path: str) -> Optional[Any]:
        """Decoded document, or None when the file does not exist."""
        file_path = self.path_for(relative_path)
        try:
            return await asyncio.to_thread(_load_json, file_path)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(str(file_path), f"Failed to read ({e})") from e

    async def read_version_marker(self) -> Optional[VersionMarker]:
        """The persisted marker; absent or unreadable markers count as a first run."""
        try:
            data = await self.read_json(VERSION_FILE)
        except PersistenceFailure as e:
            logger.warning(f"Ignoring unreadable version marker: {e}")
            return None
        if data is None:
            return None
        try:
            return VersionMarker.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed version marker: {e.error_count()} invalid fields")
            return None

    async def write_version_marker(self, marker: VersionMarker) -> Path:
        return await self.write_json(VERSION_FILE, marker.to_json())

    def list_locales(self) -> List[str]:
        """Locale subdirectories present in the tree, sorted."""
        if not self.base_path.exists():
            return []
        return sorted(item.name for item in self.base_path.iterdir() if item.is_dir())

    def list_categories(self, locale: str) -> List[str]:
        """Detail-record category subdirectories of one locale, sorted."""
        locale_path = self.base_path / locale
        if not locale_path.exists():
            return []
        return sorted(item.name for item in locale_path.iterdir() if item.is_dir())

    def list_keys(self, locale: str, category: str) -> List[str]:
        """Record keys (file stems) of one category."""
        category_path = self.base_path / locale / category
        if not category_path.exists():
            return []
        return sorted(item.stem for item in category_path.glob("*.json"))
