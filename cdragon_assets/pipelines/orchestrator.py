"""Crawl orchestrator: version check, wiki fetch and per-locale resolution."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from ..api.cdragon import CDragonClient
from ..api.fetch_client import FetchClient
from ..core.config import Settings, settings as default_settings
from ..core.constants import WIKI_SKIN_DATA_FILE
from ..core.exceptions import CrawlerError, FetchFailure
from ..core.helpers import utc_now_iso
from ..models.version import VersionMarker
from ..models.wiki import WikiSkin
from .resolver import (
    AUXILIARY_CATEGORY_NAMES,
    COLLECTION_FIELDS,
    CatalogCollections,
    CategoryOutput,
    RelationalResolver,
)
from .runner import run_bounded
from .scraper.wiki import WikiSkinScraper, flatten_wiki_skins
from .storage import AssetStorage

logger = logging.getLogger(__name__)


class CrawlState(str, Enum):
    CHECKING = "checking"
    SKIPPED = "skipped"
    CRAWLING = "crawling"
    DONE = "done"


@dataclass
class CategoryReport:
    name: str
    records_written: int = 0
    summary_written: bool = False
    failures: List[Dict[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.summary_written and not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records_written": self.records_written,
            "summary_written": self.summary_written,
            "failures": self.failures,
        }


@dataclass
class LocaleReport:
    locale: str
    categories: Dict[str, CategoryReport] = field(default_factory=dict)
    error: Optional[str] = None
    dangling_references: int = 0
    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None and all(c.success for c in self.categories.values())

    @property
    def records_written(self) -> int:
        return sum(c.records_written for c in self.categories.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error,
            "records_written": self.records_written,
            "dangling_references": self.dangling_references,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "categories": {name: c.to_dict() for name, c in self.categories.items()},
        }


@dataclass
class CrawlReport:
    state: CrawlState
    version: Optional[str] = None
    previous_version: Optional[str] = None
    forced: bool = False
    locales: Dict[str, LocaleReport] = field(default_factory=dict)
    started_at: str = field(default_factory=utc_now_iso)
    completed_at: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.state == CrawlState.SKIPPED

    @property
    def failed_locales(self) -> List[str]:
        return [locale for locale, report in self.locales.items() if not report.success]

    @property
    def success(self) -> bool:
        return self.state in (CrawlState.SKIPPED, CrawlState.DONE) and not self.failed_locales

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "success": self.success,
            "version": self.version,
            "previous_version": self.previous_version,
            "forced": self.forced,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "failed_locales": self.failed_locales,
            "locales": {locale: r.to_dict() for locale, r in self.locales.items()},
        }


class CrawlOrchestrator:
    """Runs one crawl: ``CHECKING`` then either ``SKIPPED`` or ``CRAWLING`` -> ``DONE``.

    Locales are crawled concurrently, and inside a locale every category
    pipeline runs concurrently with per-category writes bounded by
    ``settings.concurrency``. A locale whose collections cannot be fetched is
    reported as failed without affecting the others; an auxiliary collection
    that fails validation only fails its own category.
    """

    def __init__(
        self,
        fetch_client: FetchClient,
        storage: Optional[AssetStorage] = None,
        settings: Optional[Settings] = None,
        locales: Optional[Sequence[str]] = None,
    ):
        self.settings = settings or default_settings
        self.storage = storage or AssetStorage(self.settings.data_dir)
        self.locales = list(locales or self.settings.locales)
        self.client = CDragonClient(
            fetch_client,
            patch=self.settings.patch,
            locale=self.settings.fallback_locale,
            fallback_locale=self.settings.fallback_locale,
            base_host=self.settings.cdragon_url,
        )
        self.wiki_scraper = WikiSkinScraper(fetch_client, self.settings.wiki_url)
        self.state = CrawlState.CHECKING

    async def check_version(self, force: bool = False) -> Tuple[bool, str, Optional[VersionMarker]]:
        """Compare the persisted marker with the upstream version.

        Returns ``(needs_crawl, remote_version, previous_marker)``.
        """
        self.state = CrawlState.CHECKING
        previous = await self.storage.read_version_marker()
        remote_version = await self.client.fetch_version()

        logger.info(
            f"Persisted version: {previous.version if previous else None}, "
            f"remote version: {remote_version}"
        )

        if force:
            logger.info("Forced crawl requested, ignoring version marker")
            return True, remote_version, previous
        return previous is None or previous.version != remote_version, remote_version, previous

    async def run(self, force: bool = False) -> CrawlReport:
        """Run the crawl and return its report.

        Version, wiki page and marker failures propagate; per-locale failures
        are recorded in the report.
        """
        needed, remote_version, previous = await self.check_version(force)
        report = CrawlReport(
            state=self.state,
            version=remote_version,
            previous_version=previous.version if previous else None,
            forced=force,
        )

        if not needed:
            self.state = report.state = CrawlState.SKIPPED
            report.completed_at = utc_now_iso()
            logger.info("Version unchanged, no need to crawl")
            return report

        self.state = report.state = CrawlState.CRAWLING

        # The marker is bumped before any locale work so an interrupted crawl
        # is not retried automatically; use force to redo it.
        await self.storage.write_version_marker(VersionMarker(version=remote_version))

        wiki_data = await self.wiki_scraper.fetch_wiki_skin_data()
        await self.storage.write_json(
            WIKI_SKIN_DATA_FILE, {name: champion.to_json() for name, champion in wiki_data.items()}
        )
        wiki_skins = flatten_wiki_skins(wiki_data)

        logger.info(f"Start crawling {len(self.locales)} locales: {', '.join(self.locales)}")
        locale_reports = await asyncio.gather(
            *(self.crawl_locale(locale, wiki_skins) for locale in self.locales)
        )
        report.locales = {r.locale: r for r in locale_reports}

        self.state = report.state = CrawlState.DONE
        report.completed_at = utc_now_iso()

        if report.failed_locales:
            logger.error(f"Crawl finished with failed locales: {', '.join(report.failed_locales)}")
        else:
            logger.info(f"Crawl of version {remote_version} completed")
        return report

    async def fetch_collections(
        self, client: CDragonClient
    ) -> Tuple[CatalogCollections, Dict[str, str]]:
        """Fetch every catalog resource of one locale in parallel.

        Returns the collections together with the auxiliary categories whose
        payload failed validation (category name -> error); those collections
        are left empty. Fetch failures and invalid core resources raise.
        """
        paths = list(COLLECTION_FIELDS)
        results = await asyncio.gather(
            *(client.fetch_collection(path) for path in paths), return_exceptions=True
        )

        fields: Dict[str, Any] = {}
        invalid: Dict[str, str] = {}
        for path, result in zip(paths, results):
            attribute = COLLECTION_FIELDS[path]
            if isinstance(result, ValidationError) and attribute in AUXILIARY_CATEGORY_NAMES:
                category = AUXILIARY_CATEGORY_NAMES[attribute]
                logger.error(f"{client.locale} {path.value} failed validation: {result}")
                invalid[category] = f"{path.value}: {result.error_count()} validation errors"
                continue
            if isinstance(result, BaseException):
                raise result
            fields[attribute] = result
        return CatalogCollections(**fields), invalid

    async def crawl_locale(self, locale: str, wiki_skins: Mapping[int, WikiSkin]) -> LocaleReport:
        report = LocaleReport(locale=locale)
        started = time.monotonic()
        logger.info(f"{locale} start crawling")

        try:
            collections, invalid = await self.fetch_collections(self.client.with_locale(locale))
        except (FetchFailure, ValidationError) as e:
            logger.error(f"{locale} crawl failed while fetching collections: {e}")
            report.error = str(e)
            report.elapsed_seconds = time.monotonic() - started
            return report

        resolved = RelationalResolver(collections, wiki_skins).resolve()
        report.dangling_references = resolved.dangling_references

        locale_storage = self.storage.for_locale(locale)
        category_reports = await asyncio.gather(
            *(
                self.write_category(locale_storage, output)
                for output in resolved.categories
                if output.name not in invalid
            )
        )
        report.categories = {c.name: c for c in category_reports}
        for name, error in invalid.items():
            report.categories[name] = CategoryReport(
                name=name, failures=[{"key": f"{name}.json", "error": error}]
            )
        report.elapsed_seconds = time.monotonic() - started

        logger.info(
            f"{locale} crawling finished: {report.records_written} records, "
            f"cost {report.elapsed_seconds * 1000:.0f}ms"
        )
        return report

    async def write_category(self, storage: AssetStorage, output: CategoryOutput) -> CategoryReport:
        """Write a category's detail records (bounded) and then its summary index."""
        report = CategoryReport(name=output.name)

        async def _write(record: Tuple[str, Dict[str, Any]]):
            key, data = record
            return await storage.write_json(output.record_path(key), data)

        result = await run_bounded(output.records, _write, limit=self.settings.concurrency)
        report.records_written = len(result.values)
        for failure in result.failures:
            key = failure.item[0]
            logger.error(f"Failed to write {output.name}/{key}: {failure.error}")
            report.failures.append({"key": key, "error": str(failure.error)})

        try:
            await storage.write_json(output.summary_path, output.summary)
            report.summary_written = True
        except CrawlerError as e:
            logger.error(f"Failed to write {output.summary_path}: {e}")
            report.failures.append({"key": output.summary_path, "error": str(e)})

        return report


# Convenience functions for CLI usage


async def run_crawl(
    force: bool = False,
    settings: Optional[Settings] = None,
    locales: Optional[Sequence[str]] = None,
) -> CrawlReport:
    """Run one crawl with a fresh HTTP session and storage."""
    settings = settings or default_settings
    async with FetchClient(
        attempts=settings.retry_attempts,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
        timeout=settings.request_timeout,
    ) as fetch_client:
        orchestrator = CrawlOrchestrator(
            fetch_client, AssetStorage(settings.data_dir), settings, locales
        )
        return await orchestrator.run(force=force)
