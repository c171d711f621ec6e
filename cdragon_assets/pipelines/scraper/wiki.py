"""League wiki scraper for the ``Module:SkinData/data`` skin annotation table."""

import logging
import re
from typing import Any, Dict

from bs4 import BeautifulSoup
from pydantic import ValidationError

from ...api.fetch_client import FetchClient
from ...core.constants import LOL_WIKI_URL
from ...core.exceptions import FetchFailure, HTTPFetchError, LuaParseError
from ...core.helpers import skin_abs_id_to_skin_id, wiki_skin_data_url
from ...models.wiki import WikiChampion, WikiSkin, WikiSkinData
from .lua_table import LuaTableParser

logger = logging.getLogger(__name__)

SCRIPT_SELECTOR = ".mw-code.mw-script"
ERROR_CONTEXT_CHARS = 50

_HEADER_RE = re.compile(r"^\s*--\s*<pre>\s*")
_FOOTER_RE = re.compile(r"\s*--\s*</pre>\s*$")
_CATEGORY_RE = re.compile(r"--\s*\[\[Category:Lua\]\]")


def extract_script_text(html: str) -> str:
    """Text of the embedded Lua code block, or "" when the page has none."""
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one(SCRIPT_SELECTOR)
    if block is None:
        return ""
    return block.get_text()


def strip_module_markers(lua_code: str) -> str:
    """Drop the ``-- <pre>`` header, ``-- </pre>`` footer and category marker."""
    cleaned = _CATEGORY_RE.sub("", lua_code)
    cleaned = _HEADER_RE.sub("", cleaned)
    cleaned = _FOOTER_RE.sub("", cleaned)
    return cleaned.strip()


def error_context(source: str, position: int, width: int = ERROR_CONTEXT_CHARS) -> str:
    start = max(0, position - width)
    end = min(len(source), position + width)
    return source[start:end]


def parse_skin_data(lua_code: str) -> WikiSkinData:
    """Parse the module source into typed records.

    Returns an empty mapping when the table cannot be parsed; champions whose
    record does not validate are skipped individually.
    """
    source = strip_module_markers(lua_code)
    if not source:
        return {}

    parser = LuaTableParser(source)
    try:
        raw = parser.parse()
    except LuaParseError as e:
        logger.error(f"Failed to parse wiki skin data: {e}")
        logger.error(f"Code near error position: {error_context(source, e.position)!r}")
        return {}

    if parser.repairs:
        logger.warning(f"Repaired {parser.repairs} unterminated strings in wiki skin data")

    if not isinstance(raw, dict):
        logger.error(f"Wiki skin data is a {type(raw).__name__}, expected a table of champions")
        return {}

    return _validate_champions(raw)


def _validate_champions(raw: Dict[str, Any]) -> WikiSkinData:
    champions: WikiSkinData = {}
    for name, record in raw.items():
        try:
            champions[name] = WikiChampion.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Skipping wiki champion {name!r}: {e.error_count()} invalid fields")
    return champions


def flatten_wiki_skins(data: WikiSkinData) -> Dict[int, WikiSkin]:
    """Key every wiki skin by its absolute skin id."""
    flat: Dict[int, WikiSkin] = {}
    for champion in data.values():
        for skin in champion.skins.values():
            flat[skin_abs_id_to_skin_id(skin.id, champion.id)] = skin
    return flat


class WikiSkinScraper:
    """Fetches and parses the wiki skin table once per crawl."""

    def __init__(self, fetch_client: FetchClient, wiki_url: str = LOL_WIKI_URL):
        self.fetch_client = fetch_client
        self.wiki_url = wiki_url
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def page_url(self) -> str:
        return wiki_skin_data_url(self.wiki_url)

    async def fetch_wiki_skin_data(self) -> WikiSkinData:
        """Fetch the module page and return its skin table.

        A page that cannot be fetched raises ``FetchFailure``; a page whose
        table cannot be parsed yields an empty mapping.
        """
        try:
            html = await self.fetch_client.get_text(self.page_url)
        except HTTPFetchError as e:
            raise FetchFailure(self.page_url, [self.page_url], e) from e

        lua_code = extract_script_text(html)
        if not lua_code.strip():
            self.logger.warning(f"No Lua code block found at {self.page_url}")
            return {}

        data = parse_skin_data(lua_code)
        skin_count = sum(len(champion.skins) for champion in data.values())
        self.logger.info(f"Parsed wiki skin data: {len(data)} champions, {skin_count} skins")
        return data
