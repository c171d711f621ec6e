"""Tests for OpenAPI and landing page generation."""

import json

import pytest
import pytest_asyncio

from cdragon_assets.core.exceptions import CrawlerError
from cdragon_assets.models.version import VersionMarker
from cdragon_assets.pipelines.publish import (
    build_openapi_doc,
    generate_api_routes,
    generate_index_page,
    generate_openapi_doc,
    publish,
    render_index_page,
)


@pytest_asyncio.fixture
async def populated_storage(storage):
    await storage.write_version_marker(VersionMarker(version="15.1.1"))
    await storage.write_json("wiki-skin-data.json", {})
    for locale in ("default", "zh_cn"):
        await storage.write_json(f"{locale}/champion.json", {"total": 2})
        await storage.write_json(f"{locale}/champion/Aatrox.json", {})
        await storage.write_json(f"{locale}/champion/Annie.json", {})
        await storage.write_json(f"{locale}/skin.json", {"total": 1})
        await storage.write_json(f"{locale}/skin/266001.json", {})
        await storage.write_json(f"{locale}/item.json", {"total": 0})
    return storage


class TestApiRoutes:
    """Test route discovery over a written tree."""

    @pytest.mark.asyncio
    async def test_routes(self, populated_storage):
        routes = generate_api_routes(populated_storage)

        assert routes["/version.json"]["type"] == "version"
        assert routes["/wiki-skin-data.json"]["type"] == "wiki"
        assert routes["/zh_cn/champion.json"] == {
            "type": "list",
            "category": "champion",
            "locale": "zh_cn",
            "count": 2,
        }
        assert routes["/default/skin/266001.json"]["file"] == "default/skin/266001.json"
        # 2 global + 2 locales x (2 lists + 3 items)
        assert len(routes) == 12

    def test_routes_for_empty_tree(self, storage):
        assert set(generate_api_routes(storage)) == {"/version.json", "/wiki-skin-data.json"}


class TestOpenApiDoc:
    """Test the generated OpenAPI document."""

    def test_build_openapi_doc(self):
        doc = build_openapi_doc(["default", "zh_cn"], ["champion", "skin"], "15.1.1", "https://x.test")

        assert doc["openapi"] == "3.0.3"
        assert doc["info"]["version"] == "15.1.1"
        assert doc["servers"][0]["url"] == "https://x.test"
        assert doc["components"]["parameters"]["locale"]["schema"]["enum"] == ["default", "zh_cn"]
        assert "/{locale}/champion/{championAlias}.json" in doc["paths"]
        assert "/{locale}/skin/{skinId}.json" in doc["paths"]
        assert "/{locale}/universe.json" not in doc["paths"]
        assert doc["paths"]["/{locale}/skin.json"]["get"]["operationId"] == "getSkins"
        assert {t["name"] for t in doc["tags"]} >= {"Version", "Champions", "Wiki"}

    @pytest.mark.asyncio
    async def test_generate_openapi_doc_writes_file(self, populated_storage):
        path = await generate_openapi_doc(populated_storage, "https://x.test")

        doc = json.loads(path.read_text(encoding="utf-8"))
        assert path.name == "openapi.json"
        assert doc["info"]["version"] == "15.1.1"
        assert doc["components"]["parameters"]["locale"]["schema"]["enum"] == ["default", "zh_cn"]

    @pytest.mark.asyncio
    async def test_generate_openapi_doc_requires_locales(self, storage):
        with pytest.raises(CrawlerError):
            await generate_openapi_doc(storage)


class TestIndexPage:
    def test_render_points_at_openapi_document(self):
        html = render_index_page("https://x.test/assets/")

        assert 'data-url="https://x.test/assets/openapi.json"' in html
        assert "@scalar/api-reference" in html

    @pytest.mark.asyncio
    async def test_publish(self, populated_storage):
        result = await publish(populated_storage, "https://x.test")

        assert result["routes"] == 12
        assert result["index"].endswith("index.html")
        assert (populated_storage.base_path / "index.html").exists()
        assert (populated_storage.base_path / "openapi.json").exists()

    @pytest.mark.asyncio
    async def test_generate_index_page(self, storage):
        path = await generate_index_page(storage, "https://x.test")

        assert "https://x.test/openapi.json" in path.read_text(encoding="utf-8")
