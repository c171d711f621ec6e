"""
Test configuration and fixtures for CDragon Assets.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest

from cdragon_assets.core.config import Settings
from cdragon_assets.core.constants import (
    CDRAGON_URL,
    CONTENT_METADATA_PATH,
    GAME_DATA_PLUGIN,
    LOL_WIKI_URL,
    ResourcePath,
)
from cdragon_assets.core.exceptions import HTTPFetchError
from cdragon_assets.core.helpers import wiki_skin_data_url
from cdragon_assets.pipelines.storage import AssetStorage

PBE_URL = f"{CDRAGON_URL}/pbe"
WIKI_PAGE_URL = wiki_skin_data_url(LOL_WIKI_URL)


def game_data_url(locale: str, path: ResourcePath) -> str:
    return f"{PBE_URL}/{GAME_DATA_PLUGIN}/{locale}/{path.value}"


SAMPLE_WIKI_LUA = """-- <pre>
return {
  ["Aatrox"] = {
    ["id"] = 266,
    ["skins"] = {
      ["Original Aatrox"] = {
        ["id"] = 0,
        ["availability"] = "Available",
        ["cost"] = 4800,
      },
      ["Justicar Aatrox"] = {
        ["id"] = 1,
        ["availability"] = "Available",
        ["cost"] = 975,
        ["set"] = {"Justicar"},
        ["chromas"] = {
          ["Ruby"] = {["id"] = 266002, ["availability"] = "Available"},
        },
        ["lore"] = "A righteous blade.",
      },
    },
  },
}
-- </pre>
-- [[Category:Lua]]
"""


def wiki_page(lua: str) -> str:
    """Render Lua source the way the wiki embeds it in a rendered module page."""
    escaped = lua.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return f'<div class="mw-parser-output"><pre class="mw-code mw-script">{escaped}</pre></div>'


class FakeFetchClient:
    """In-memory stand-in for ``FetchClient`` keyed by exact URL.

    Unknown URLs fail the way an exhausted 404 would.
    """

    def __init__(
        self,
        json_routes: Optional[Dict[str, Any]] = None,
        text_routes: Optional[Dict[str, str]] = None,
    ):
        self.json_routes = json_routes or {}
        self.text_routes = text_routes or {}
        self.requests: List[str] = []

    async def get_json(self, url: str) -> Any:
        self.requests.append(url)
        if url not in self.json_routes:
            raise HTTPFetchError(url, "HTTP 404", status=404)
        return copy.deepcopy(self.json_routes[url])

    async def get_text(self, url: str) -> str:
        self.requests.append(url)
        if url not in self.text_routes:
            raise HTTPFetchError(url, "HTTP 404", status=404)
        return self.text_routes[url]


@pytest.fixture
def catalog_payloads() -> Dict[ResourcePath, Any]:
    """Upstream payloads of one locale: two champions, a handful of skins and lines."""
    payloads: Dict[ResourcePath, Any] = {path: [] for path in ResourcePath}
    payloads[ResourcePath.CHAMPION_SUMMARY] = [
        {
            "id": 266,
            "name": "Aatrox",
            "alias": "Aatrox",
            "roles": ["fighter", "tank"],
            "squarePortraitPath": "/lol-game-data/assets/v1/champion-icons/266.png",
        },
        {"id": 1, "name": "Annie", "alias": "Annie", "roles": ["mage"]},
    ]
    payloads[ResourcePath.SKINS] = {
        "266001": {
            "id": 266001,
            "isBase": False,
            "name": "Justicar Aatrox",
            "rarity": "kNoRarity",
            "skinLines": [{"id": 1}],
        },
        "266000": {"id": 266000, "isBase": True, "name": "Aatrox", "rarity": "kNoRarity"},
        "1001": {
            "id": 1001,
            "isBase": False,
            "name": "Goth Annie",
            "rarity": "kNoRarity",
            "skinLines": [{"id": 2}, {"id": 1}],
        },
        "1000": {"id": 1000, "isBase": True, "name": "Annie", "rarity": "kNoRarity"},
    }
    payloads[ResourcePath.SKINLINES] = [
        {"id": 2, "name": "Gothic", "description": ""},
        {"id": 1, "name": "Justicar", "description": "Order above all."},
    ]
    payloads[ResourcePath.UNIVERSES] = [
        {"id": 10, "name": "Champions of Order", "description": "", "skinSets": [2, 1, 404]},
        {"id": 11, "name": "Unreleased", "description": ""},
        {"id": 12, "name": "Bandle City", "description": "", "skinSets": []},
    ]
    payloads[ResourcePath.ITEMS] = [
        {"id": 1001, "name": "Boots", "from": [], "to": [3006], "price": 300},
    ]
    return payloads


def build_routes(
    catalog_payloads: Dict[ResourcePath, Any],
    locales: List[str],
    version: str = "15.1.1",
) -> Dict[str, Any]:
    routes: Dict[str, Any] = {f"{PBE_URL}/{CONTENT_METADATA_PATH}": {"version": version}}
    for locale in locales:
        for path, payload in catalog_payloads.items():
            routes[game_data_url(locale, path)] = payload
    return routes


@pytest.fixture
def fake_fetch_client(catalog_payloads) -> FakeFetchClient:
    """Mirror serving the ``default`` locale only, plus the wiki page."""
    return FakeFetchClient(
        json_routes=build_routes(catalog_payloads, ["default"]),
        text_routes={WIKI_PAGE_URL: wiki_page(SAMPLE_WIKI_LUA)},
    )


@pytest.fixture
def storage(tmp_path) -> AssetStorage:
    return AssetStorage(tmp_path / ".data")


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path / ".data",
        locales=["default", "zh_cn"],
        patch="pbe",
        concurrency=3,
    )
