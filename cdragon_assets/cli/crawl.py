"""CLI commands for crawling and publishing the asset tree."""

import asyncio
import json as _json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

from ..core.config import Settings, settings
from ..core.constants import LANGUAGES
from ..core.exceptions import CrawlerError
from ..pipelines.orchestrator import CrawlReport, CrawlState, run_crawl
from ..pipelines.publish import publish as publish_tree
from ..pipelines.storage import AssetStorage


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_locales(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    locales = [s.strip() for s in value.split(",") if s.strip()]
    unknown = [locale for locale in locales if locale not in LANGUAGES]
    if unknown:
        raise click.BadParameter(f"Unknown locales: {', '.join(unknown)}", param_hint="--locales")
    return locales


def _effective_settings(data_dir: Optional[Path]) -> Settings:
    if data_dir is None:
        return settings
    return settings.model_copy(update={"data_dir": data_dir})


def _print_report(report: CrawlReport) -> None:
    console = Console()
    table = Table(title=f"Crawl of {report.version}")
    table.add_column("Locale", no_wrap=True)
    table.add_column("Status")
    table.add_column("Records", justify="right")
    table.add_column("Dangling refs", justify="right")
    table.add_column("Errors")

    for locale, locale_report in report.locales.items():
        errors = []
        if locale_report.error:
            errors.append(locale_report.error)
        for category in locale_report.categories.values():
            errors.extend(f"{category.name}/{f['key']}" for f in category.failures)
        table.add_row(
            locale,
            "✅" if locale_report.success else "❌",
            str(locale_report.records_written),
            str(locale_report.dangling_references),
            "; ".join(errors)[:80],
        )

    console.print(table)


@click.command()
@click.option("--force", is_flag=True, help="Crawl even if the upstream version is unchanged")
@click.option("--locales", help="Comma-separated list of locales to crawl (zh_cn,default,...)")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root of the written JSON tree",
)
@click.option("--json", "as_json", is_flag=True, help="Output the crawl report as JSON")
def crawl(force: bool, locales: Optional[str], data_dir: Optional[Path], as_json: bool):
    """Crawl upstream game data when its version changed."""
    _configure_logging(settings.log_level)
    locale_list = _parse_locales(locales)
    cfg = _effective_settings(data_dir)

    if not as_json:
        click.echo("🔍 Checking upstream version...")

    async def _run():
        report = await run_crawl(force=force, settings=cfg, locales=locale_list)
        if report.state == CrawlState.DONE:
            await publish_tree(AssetStorage(cfg.data_dir), cfg.app_url)
        return report

    started = time.monotonic()
    try:
        report = asyncio.run(_run())
    except CrawlerError as e:
        click.echo(f"❌ Crawl failed: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(_json.dumps(report.to_dict(), indent=2))
    elif report.skipped:
        click.echo(f"⏭️  Version {report.version} unchanged, nothing to crawl")
    else:
        _print_report(report)
        if report.success:
            click.echo(f"✅ Crawl of {report.version} completed in {time.monotonic() - started:.1f}s")
        else:
            click.echo(f"❌ Failed locales: {', '.join(report.failed_locales)}")

    sys.exit(0 if report.success else 1)


@click.command()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root of the written JSON tree",
)
@click.option("--app-url", help="Public URL the tree is served from")
def publish(data_dir: Optional[Path], app_url: Optional[str]):
    """Regenerate the OpenAPI document and landing page."""
    _configure_logging(settings.log_level)
    cfg = _effective_settings(data_dir)
    click.echo("📝 Generating API reference...")

    try:
        result = asyncio.run(publish_tree(AssetStorage(cfg.data_dir), app_url or cfg.app_url))
    except CrawlerError as e:
        click.echo(f"❌ Publishing failed: {e}", err=True)
        sys.exit(1)

    click.echo("✅ Publishing completed!")
    click.echo(f"   OpenAPI document: {result['openapi']}")
    click.echo(f"   Index page: {result['index']}")
    click.echo(f"   Routes: {result['routes']}")


@click.command()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root of the written JSON tree",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def status(data_dir: Optional[Path], as_json: bool):
    """Show the persisted version marker and the locales on disk."""
    cfg = _effective_settings(data_dir)
    storage = AssetStorage(cfg.data_dir)
    marker = asyncio.run(storage.read_version_marker())

    locales = {
        locale: {
            category: len(storage.list_keys(locale, category))
            for category in storage.list_categories(locale)
        }
        for locale in storage.list_locales()
    }

    if as_json:
        payload = {
            "data_dir": str(cfg.data_dir),
            "version": marker.to_json() if marker else None,
            "locales": locales,
        }
        click.echo(_json.dumps(payload, indent=2))
        return

    click.echo("📊 Crawl Status")
    click.echo(f"   Data directory: {cfg.data_dir}")
    if marker is None:
        click.echo("   Version: none (next crawl is a first run)")
    else:
        click.echo(f"   Version: {marker.version} (crawled at {marker.crawled_at})")

    if not locales:
        click.echo("   No locales on disk")
        return

    console = Console()
    categories = sorted({c for counts in locales.values() for c in counts})
    table = Table(title="Records per locale")
    table.add_column("Locale", no_wrap=True)
    for category in categories:
        table.add_column(category, justify="right")
    for locale, counts in locales.items():
        table.add_row(locale, *(str(counts.get(c, 0)) for c in categories))
    console.print(table)
