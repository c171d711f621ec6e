"""Tests for the wiki skin-data scraper."""

import pytest

from cdragon_assets.core.exceptions import FetchFailure
from cdragon_assets.models.wiki import WikiChampion
from cdragon_assets.pipelines.scraper.wiki import (
    WikiSkinScraper,
    error_context,
    extract_script_text,
    flatten_wiki_skins,
    parse_skin_data,
    strip_module_markers,
)

from conftest import SAMPLE_WIKI_LUA, WIKI_PAGE_URL, FakeFetchClient, wiki_page


class TestPageExtraction:
    """Test locating and cleaning the embedded Lua block."""

    def test_extract_script_text(self):
        text = extract_script_text(wiki_page('return { ["A"] = 1 }'))

        assert text == 'return { ["A"] = 1 }'

    def test_extract_script_text_unescapes_markup(self):
        text = extract_script_text(wiki_page(SAMPLE_WIKI_LUA))

        assert text.startswith("-- <pre>")

    def test_page_without_code_block(self):
        assert extract_script_text("<html><body><p>Nothing here</p></body></html>") == ""

    def test_strip_module_markers(self):
        cleaned = strip_module_markers(SAMPLE_WIKI_LUA)

        assert cleaned.startswith("return {")
        assert cleaned.endswith("}")
        assert "<pre>" not in cleaned
        assert "Category:Lua" not in cleaned

    def test_error_context_window(self):
        source = "x" * 100 + "ERROR" + "y" * 100

        context = error_context(source, 100, width=5)

        assert context == "xxxxxERROR"


class TestParseSkinData:
    """Test typed parsing of the skin table."""

    def test_parses_champions_and_skins(self):
        data = parse_skin_data(SAMPLE_WIKI_LUA)

        assert set(data) == {"Aatrox"}
        champion = data["Aatrox"]
        assert isinstance(champion, WikiChampion)
        assert champion.id == 266
        justicar = champion.skins["Justicar Aatrox"]
        assert justicar.id == 1
        assert justicar.cost == 975
        assert justicar.set == ["Justicar"]
        assert justicar.chromas["Ruby"].id == 266002

    def test_empty_tables_normalized(self):
        lua = 'return { ["Annie"] = { ["id"] = 1, ["skins"] = { ["Annie"] = { ["id"] = 0, ["set"] = {}, ["chromas"] = {} } } } }'

        skin = parse_skin_data(lua)["Annie"].skins["Annie"]

        assert skin.set == []
        assert skin.chromas == {}

    def test_malformed_table_yields_empty_mapping(self):
        assert parse_skin_data('return { ["Aatrox"] = { ["id"] = 266 ') == {}

    def test_non_table_yields_empty_mapping(self):
        assert parse_skin_data('return "just a string"') == {}

    def test_invalid_champion_is_skipped(self):
        lua = 'return { ["Good"] = { ["id"] = 1 }, ["Bad"] = { ["name"] = "no id" } }'

        data = parse_skin_data(lua)

        assert set(data) == {"Good"}

    def test_unterminated_lore_is_repaired(self):
        lua = (
            'return {\n  ["Annie"] = {\n    ["id"] = 1,\n    ["skins"] = {\n'
            '      ["Goth Annie"] = {\n        ["id"] = 1,\n'
            '        ["lore"] = "Darkness falls,\n        ["cost"] = 520,\n      },\n'
            "    },\n  },\n}"
        )

        skin = parse_skin_data(lua)["Annie"].skins["Goth Annie"]

        assert skin.lore == "Darkness falls"
        assert skin.cost == 520

    def test_flatten_wiki_skins_uses_absolute_ids(self):
        flat = flatten_wiki_skins(parse_skin_data(SAMPLE_WIKI_LUA))

        assert set(flat) == {266000, 266001}
        assert flat[266001].cost == 975


class TestWikiSkinScraper:
    """Test fetching the module page."""

    def test_page_url(self):
        scraper = WikiSkinScraper(FakeFetchClient())

        assert scraper.page_url == WIKI_PAGE_URL

    @pytest.mark.asyncio
    async def test_fetch_wiki_skin_data(self, fake_fetch_client):
        scraper = WikiSkinScraper(fake_fetch_client)

        data = await scraper.fetch_wiki_skin_data()

        assert set(data) == {"Aatrox"}
        assert fake_fetch_client.requests == [WIKI_PAGE_URL]

    @pytest.mark.asyncio
    async def test_missing_code_block_yields_empty_mapping(self):
        client = FakeFetchClient(text_routes={WIKI_PAGE_URL: "<html><body></body></html>"})

        assert await WikiSkinScraper(client).fetch_wiki_skin_data() == {}

    @pytest.mark.asyncio
    async def test_unreachable_page_raises(self):
        with pytest.raises(FetchFailure) as exc_info:
            await WikiSkinScraper(FakeFetchClient()).fetch_wiki_skin_data()

        assert exc_info.value.urls == [WIKI_PAGE_URL]
